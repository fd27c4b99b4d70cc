from __future__ import annotations

import re
from pathlib import Path
from typing import NamedTuple

import markdown

from .errors import ConversionError, InputError
from .extensions import AutolinkExtension, StrikethroughExtension

META_RE = re.compile(r"^(?P<key>[A-Za-z0-9_][A-Za-z0-9_-]*)[ \t]*:[ \t]*(?P<value>.*)$")
CONTINUATION_RE = re.compile(r"^[ \t]+(?P<value>\S.*)$")
FENCE_OPEN = "---"
FENCE_CLOSE = {"---", "..."}

MARKDOWN_EXTENSIONS = ["fenced_code", "footnotes", "tables", "toc", "smarty"]


class Document(NamedTuple):
    body: str
    body_length: int
    metadata: list[tuple[str, str]]


def read_document(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InputError(path, exc.strerror or str(exc)) from None


def _collect_pairs(lines: list[str], strict: bool) -> tuple[list[tuple[str, str]], int]:
    """Parse ``key: value`` lines, returning the pairs and the number of lines consumed.

    In strict (MultiMarkdown) mode the block ends at the first blank or
    non-metadata line. Otherwise such lines are skipped.
    """
    pairs: list[tuple[str, str]] = []
    consumed = 0
    for line in lines:
        continuation = CONTINUATION_RE.match(line)
        if continuation and pairs:
            key, value = pairs[-1]
            pairs[-1] = (key, f"{value} {continuation.group('value').strip()}".strip())
            consumed += 1
            continue
        stripped = line.strip()
        match = META_RE.match(stripped)
        if match is None:
            if strict:
                break
            consumed += 1
            continue
        pairs.append((match.group("key"), match.group("value").strip()))
        consumed += 1
    return pairs, consumed


def parse_front_matter(text: str) -> tuple[list[tuple[str, str]], str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines:
        return [], clean_text

    if lines[0].strip() == FENCE_OPEN:
        end = None
        for i in range(1, len(lines)):
            if lines[i].strip() in FENCE_CLOSE:
                end = i
                break
        if end is None:
            return [], clean_text
        block = [line for line in lines[1:end] if line.strip() and not line.lstrip().startswith("#")]
        pairs, _ = _collect_pairs(block, strict=False)
        return pairs, "\n".join(lines[end + 1 :])

    if not META_RE.match(lines[0]):
        return [], clean_text
    pairs, consumed = _collect_pairs(lines, strict=True)
    return pairs, "\n".join(lines[consumed:])


def markdown_to_html(text: str, highlight: bool = False) -> str:
    extensions: list = list(MARKDOWN_EXTENSIONS)
    extensions.extend([StrikethroughExtension(), AutolinkExtension()])
    if highlight:
        extensions.append("codehilite")
    md = markdown.Markdown(extensions=extensions)
    return md.convert(text)


def convert_document(data: bytes, highlight: bool = False) -> Document:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConversionError(f"not valid UTF-8 at byte {exc.start}") from None
    metadata, body = parse_front_matter(text)
    html_body = markdown_to_html(body, highlight=highlight)
    return Document(html_body, len(html_body), metadata)
