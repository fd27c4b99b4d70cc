from __future__ import annotations

import datetime as dt

from .errors import DateFormatError, DateParseError

INPUT_DATE_FORMAT = "%Y-%m-%d %H:%M"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
RFC822_FORMAT = "%a, %d %b %Y %H:%M:%S %z"
# Formatted dates must fit a 64 byte buffer, terminator included.
DATE_BUFFER_SIZE = 64


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_timestamp(value: str, pattern: str = INPUT_DATE_FORMAT) -> dt.datetime:
    # strptime accepts any Unicode digit for %Y, %m and so on.
    if not value.isascii():
        raise DateParseError(value, pattern)
    try:
        return dt.datetime.strptime(value, pattern)
    except ValueError:
        raise DateParseError(value, pattern) from None


def format_timestamp(value: dt.datetime, pattern: str) -> str:
    try:
        text = value.strftime(pattern)
    except ValueError as exc:
        raise DateFormatError(pattern, str(exc)) from None
    if not text:
        raise DateFormatError(pattern, "empty result")
    if len(text.encode("utf-8")) >= DATE_BUFFER_SIZE - 1:
        raise DateFormatError(pattern, f"result exceeds {DATE_BUFFER_SIZE - 2} bytes")
    return text


def rfc822_date(value: dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return format_timestamp(value, RFC822_FORMAT)
