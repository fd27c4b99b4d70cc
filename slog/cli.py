from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, TextIO

from .config import RenderMode, Settings, load_config, parse_mode
from .errors import SlogError
from .pages import write_aggregate, write_post_pages
from .posts import load_posts
from .render import load_template
from .utils import DEFAULT_DATE_FORMAT, parse_bool


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Fill in the defaults that depend on the output layout.

    The aggregate page defaults to the feed variant with id validation; the
    per-post layout defaults to plain HTML without it.
    """
    aggregate = not args.output
    if args.mode:
        mode = parse_mode(args.mode)
    else:
        mode = RenderMode.FEED if aggregate else RenderMode.HTML
    if args.validate_ids is None:
        validate_ids = aggregate
    else:
        validate_ids = parse_bool(args.validate_ids)
    return Settings(
        date_format=args.date_format,
        mode=mode,
        validate_ids=validate_ids,
        highlight_code=parse_bool(args.highlight),
        page_suffix=args.suffix,
    )


def build_site(args: argparse.Namespace, stdout: TextIO) -> list[Path]:
    settings = resolve_settings(args)
    template = load_template(Path(args.template))
    posts = load_posts([Path(path) for path in args.posts], settings)
    if not args.output:
        write_aggregate(template, posts, stdout, settings.mode)
        return []
    return write_post_pages(template, posts, Path(args.output), settings.mode, settings.page_suffix)


def main(argv: Optional[list[str]] = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="slog.toml",
        help="Path to config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    try:
        config = load_config(Path(pre_args.config))
    except SlogError as exc:
        print(f"slog: {exc}", file=sys.stderr)
        sys.exit(1)

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        value = cfg_value(key, default)
        return default if value is None else str(value)

    parser = argparse.ArgumentParser(
        prog="slog",
        description="Render markdown posts into pages using header/item/footer templates.",
    )
    parser.add_argument("--config", default=pre_args.config, help="Path to config file (TOML/YAML/JSON).")
    parser.add_argument(
        "-f",
        "--date-format",
        default=cfg_str("date_format", DEFAULT_DATE_FORMAT),
        help="strftime pattern for displayed dates.",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in RenderMode],
        default=cfg_value("mode", None),
        help="Placeholder set and escaping (default: feed for one page, html for per-post pages).",
    )
    parser.add_argument(
        "--validate-ids",
        action=argparse.BooleanOptionalAction,
        default=cfg_value("validate_ids", None),
        help="Require ids made of lowercase letters only (default: on for one page).",
    )
    parser.add_argument(
        "--highlight",
        action=argparse.BooleanOptionalAction,
        default=cfg_value("highlight_code", False),
        help="Highlight fenced code blocks with Pygments.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=cfg_str("output", ""),
        help="Write one page per post into this directory instead of one page to stdout.",
    )
    parser.add_argument(
        "--suffix",
        default=cfg_str("suffix", ".html"),
        help="File suffix for per-post pages.",
    )
    parser.add_argument("template", help="Directory containing header, item and footer.")
    parser.add_argument("posts", nargs="+", help="Markdown posts, rendered in the given order.")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    try:
        written = build_site(args, sys.stdout)
    except SlogError as exc:
        print(f"slog: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    if args.output:
        print(f"Wrote {len(written)} pages to {args.output} in {elapsed:.2f}s.", file=sys.stderr)


if __name__ == "__main__":
    main()
