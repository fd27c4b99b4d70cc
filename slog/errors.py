from __future__ import annotations

from pathlib import Path
from typing import Optional


class SlogError(Exception):
    """Base class for every fatal condition raised by slog.

    ``source`` names the input file the error belongs to, when known. It is
    prepended to the message so a single diagnostic line identifies both the
    failing input and the violated contract.
    """

    source: Optional[Path] = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.source is not None:
            return f"{self.source}: {message}"
        return message


class InputError(SlogError):
    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(reason)
        self.source = Path(path)


class ConversionError(SlogError):
    pass


class ConfigError(SlogError):
    pass


class ValidationError(SlogError):
    pass


class MissingMetadataError(ValidationError):
    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"missing required metadata: {', '.join(fields)}")
        self.fields = list(fields)


class InvalidIdentifierError(ValidationError):
    def __init__(self, identifier: str, char: str) -> None:
        super().__init__(f"invalid id {identifier!r}: {char!r} is not a lowercase letter")
        self.identifier = identifier
        self.char = char


class DuplicateIdentifierError(ValidationError):
    def __init__(self, identifier: str, first: Optional[Path] = None, second: Optional[Path] = None) -> None:
        message = f"duplicate id {identifier!r}"
        if first is not None and second is not None:
            message = f"{message} in {first} and {second}"
        super().__init__(message)
        self.identifier = identifier


class DateParseError(ValidationError):
    def __init__(self, value: str, pattern: str) -> None:
        super().__init__(f"invalid date {value!r}, expected format {pattern!r}")
        self.value = value


class DateFormatError(ValidationError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"cannot format date with {pattern!r}: {reason}")
        self.pattern = pattern


class TemplateSyntaxError(SlogError):
    def __init__(self, message: str, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"{message} at line {line} of item"
        super().__init__(message)
        self.line = line
