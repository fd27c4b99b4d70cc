from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


def front_matter_doc(
    id: str | None = "hello",
    title: str | None = "Hello",
    date: str | None = "2022-05-01 14:30",
    body: str = "Some *text*.",
) -> str:
    lines = ["---"]
    if id is not None:
        lines.append(f"id: {id}")
    if title is not None:
        lines.append(f"title: {title}")
    if date is not None:
        lines.append(f"date: {date}")
    lines.append("---")
    lines.append("")
    lines.append(body)
    return "\n".join(lines) + "\n"


@pytest.fixture
def front_matter() -> Callable[..., str]:
    """Returns a builder for post text with fenced front-matter."""
    return front_matter_doc


@pytest.fixture
def write_post(tmp_path: Path) -> Callable[..., Path]:
    """Returns a factory writing a markdown post into tmp_path/posts."""
    posts_dir = tmp_path / "posts"
    posts_dir.mkdir()

    def _write(name: str, text: str | None = None, **fields: str | None) -> Path:
        path = posts_dir / name
        path.write_text(text if text is not None else front_matter_doc(**fields), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_template(tmp_path: Path) -> Callable[..., Path]:
    """Returns a factory writing header/item/footer into a template directory."""

    def _make(header: str = "<ul>\n", item: str = "<li>${title}</li>\n", footer: str = "</ul>\n", name: str = "tmpl") -> Path:
        directory = tmp_path / name
        directory.mkdir()
        (directory / "header").write_text(header, encoding="utf-8")
        (directory / "item").write_text(item, encoding="utf-8")
        (directory / "footer").write_text(footer, encoding="utf-8")
        return directory

    return _make
