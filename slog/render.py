from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .config import RenderMode
from .errors import InputError, TemplateSyntaxError
from .posts import Post

PLACEHOLDER_OPEN = "${"
PLACEHOLDER_CLOSE = "}"
TEMPLATE_PARTS = ("header", "item", "footer")

# The apostrophe entity has no trailing semicolon; existing feeds depend on it.
TEXT_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "'": "&#39",
    "&": "&amp;",
    '"': "&quot;",
}

FieldGetter = Callable[[Post], Optional[str]]

HTML_FIELDS: dict[str, tuple[FieldGetter, bool]] = {
    "id": (lambda post: post.id, False),
    "title": (lambda post: post.title, False),
    "date": (lambda post: post.date_display, False),
    "body": (lambda post: post.body, False),
}

FEED_FIELDS: dict[str, tuple[FieldGetter, bool]] = {
    "id": (lambda post: post.id, False),
    "title": (lambda post: post.title, True),
    "datefmt": (lambda post: post.date_display, True),
    "daterss": (lambda post: post.date_feed, True),
    "body": (lambda post: post.body, False),
}

FIELD_TABLES = {
    RenderMode.HTML: HTML_FIELDS,
    RenderMode.FEED: FEED_FIELDS,
}


@dataclass(frozen=True)
class Template:
    header: str
    item: str
    footer: str


def read_template(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except OSError as exc:
        raise InputError(path, exc.strerror or str(exc)) from None
    except UnicodeDecodeError as exc:
        raise InputError(path, f"not valid UTF-8 at byte {exc.start}") from None


def load_template(directory: Path) -> Template:
    parts = {name: read_template(directory / name) for name in TEMPLATE_PARTS}
    return Template(**parts)


def escape_text(value: str) -> str:
    return "".join(TEXT_ESCAPES.get(char, char) for char in value)


def resolve_placeholder(name: str, post: Post, mode: RenderMode) -> str:
    """Return the text for ``${name}``.

    Names outside the mode's field table render as an empty string so that
    templates can carry placeholders meant for other modes or later versions.
    """
    entry = FIELD_TABLES[mode].get(name)
    if entry is None:
        return ""
    getter, escaped = entry
    value = getter(post) or ""
    return escape_text(value) if escaped else value


def render_item(item: str, post: Post, mode: RenderMode) -> str:
    out: list[str] = []
    pos = 0
    while True:
        start = item.find(PLACEHOLDER_OPEN, pos)
        if start == -1:
            out.append(item[pos:])
            break
        out.append(item[pos:start])
        name_start = start + len(PLACEHOLDER_OPEN)
        end = item.find(PLACEHOLDER_CLOSE, name_start)
        if end == -1:
            raise TemplateSyntaxError("missing closing bracket", line=item.count("\n", 0, start) + 1)
        out.append(resolve_placeholder(item[name_start:end], post, mode))
        pos = end + len(PLACEHOLDER_CLOSE)
    return "".join(out)


def write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", newline="")
    except OSError as exc:
        raise InputError(path, exc.strerror or str(exc)) from None
    except ValueError as exc:
        raise InputError(path, str(exc)) from None
