from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .config import RenderMode, Settings
from .content import convert_document, read_document
from .errors import ConversionError, MissingMetadataError, SlogError
from .utils import format_timestamp, parse_timestamp, rfc822_date
from .validation import check_duplicates, validate_identifier

REQUIRED_FIELDS = ("id", "title", "date")


@dataclass(frozen=True)
class Post:
    id: str
    title: str
    date: dt.datetime
    date_display: str
    body: str
    date_feed: Optional[str] = None
    source: Optional[Path] = None


class MetadataFields(dict):
    """Recognized front-matter fields where the first occurrence of a key wins."""

    def __init__(self, validate_ids: bool = False) -> None:
        super().__init__()
        self.validate_ids = validate_ids

    def capture(self, key: str, value: str) -> bool:
        if key not in REQUIRED_FIELDS or key in self:
            return False
        if key == "id" and self.validate_ids:
            validate_identifier(value)
        self[key] = value
        return True

    def missing(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not self.get(name, "").strip()]


def build_post_from_bytes(data: bytes, settings: Settings, source: Optional[Path] = None) -> Post:
    document = convert_document(data, highlight=settings.highlight_code)
    if document.body_length == 0:
        raise ConversionError("missing body")

    fields = MetadataFields(validate_ids=settings.validate_ids)
    for key, value in document.metadata:
        fields.capture(key, value)
    missing = fields.missing()
    if missing:
        raise MissingMetadataError(missing)

    date_value = parse_timestamp(fields["date"])
    date_feed = rfc822_date(date_value) if settings.mode is RenderMode.FEED else None
    return Post(
        id=fields["id"],
        title=fields["title"],
        date=date_value,
        date_display=format_timestamp(date_value, settings.date_format),
        body=document.body[: document.body_length],
        date_feed=date_feed,
        source=source,
    )


def build_post(path: Path, settings: Settings) -> Post:
    data = read_document(path)
    try:
        return build_post_from_bytes(data, settings, source=path)
    except SlogError as exc:
        if exc.source is None:
            exc.source = path
        raise


def load_posts(paths: Iterable[Path], settings: Settings) -> list[Post]:
    posts = [build_post(Path(path), settings) for path in paths]
    check_duplicates(posts)
    return posts
