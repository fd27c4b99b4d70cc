from __future__ import annotations

import enum
import json
import tomllib
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ConfigError
from .utils import DEFAULT_DATE_FORMAT


class RenderMode(enum.Enum):
    HTML = "html"
    FEED = "feed"


@dataclass(frozen=True)
class Settings:
    """Run-wide options, created once at startup and passed explicitly.

    ``mode`` selects the placeholder vocabulary and escaping policy,
    ``validate_ids`` restricts ids to lowercase ASCII letters.
    """

    date_format: str = DEFAULT_DATE_FORMAT
    mode: RenderMode = RenderMode.HTML
    validate_ids: bool = False
    highlight_code: bool = False
    page_suffix: str = ".html"


def parse_mode(value: object) -> RenderMode:
    if isinstance(value, RenderMode):
        return value
    try:
        return RenderMode(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(mode.value for mode in RenderMode)
        raise ConfigError(f"unknown render mode {value!r} (choose from {choices})") from None


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc.strerror or exc}") from None
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from None
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from None
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from None
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")
    return data
