from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence, TextIO

from .config import RenderMode
from .errors import ValidationError
from .posts import Post
from .render import Template, render_item, write_text


def render_page(template: Template, posts: Sequence[Post], sink: TextIO, mode: RenderMode) -> None:
    """Write ``header``, one substituted ``item`` per post, then ``footer``.

    Each item is rendered completely before it is written, so a template
    error never leaves half an item in the sink.
    """
    sink.write(template.header)
    for post in posts:
        sink.write(render_item(template.item, post, mode))
    sink.write(template.footer)


def render_page_text(template: Template, posts: Sequence[Post], mode: RenderMode) -> str:
    buffer = io.StringIO()
    render_page(template, posts, buffer, mode)
    return buffer.getvalue()


def write_aggregate(template: Template, posts: Sequence[Post], stream: TextIO, mode: RenderMode) -> None:
    render_page(template, posts, stream, mode)
    stream.flush()


def write_post_pages(
    template: Template,
    posts: Sequence[Post],
    output_dir: Path,
    mode: RenderMode,
    suffix: str = ".html",
) -> list[Path]:
    written = []
    for post in posts:
        if post.id in {".", ".."} or "\x00" in post.id or Path(post.id).name != post.id:
            error = ValidationError(f"id {post.id!r} cannot be used as a file name")
            error.source = post.source
            raise error
        path = output_dir / f"{post.id}{suffix}"
        write_text(path, render_page_text(template, [post], mode))
        written.append(path)
    return written
