"""Application entry point for the newslens search CLI."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console

import settings
from adapters.news_sources import HttpNewsSource, JsonFileNewsSource
from adapters.result_formatting import build_result_text, format_parse_error
from core.config import SORT_FIELDS, SORT_ORDERS, SearchConfig
from core.news_search import NewsSearcher
from core.normalizer import normalize_query
from core.ports import NewsSourcePort
from core.query_parser import QueryParser
from core.tokenizer import ParseError

NAME = "NEWSLENS"
FONT = "tarty-1"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _rotating_file_handler(file_cfg: dict) -> RotatingFileHandler:
    """Build the optional log file handler, creating its directory."""

    path = file_cfg.get("path", "logs/newslens.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging() -> None:
    """Apply the optional "logging" block of config.json to the root logger."""

    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_rotating_file_handler(file_cfg))
    if not handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def _build_source(override: Optional[str]) -> NewsSourcePort:
    """Pick the news source: CLI override, then config path, then config URL."""

    location = override or settings.SOURCE_PATH or settings.SOURCE_URL
    if not location:
        raise RuntimeError("Configure source.path or source.url, or pass --source")
    if location.startswith(("http://", "https://")):
        return HttpNewsSource(location, timeout=settings.SOURCE_TIMEOUT, base_url=settings.SOURCE_BASE_URL)
    return JsonFileNewsSource(location, base_url=settings.SOURCE_BASE_URL)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _search(args: argparse.Namespace) -> int:
    if not args.no_banner:
        _print_banner()
    console = Console()

    limit = args.limit if args.limit is not None else settings.DISPLAY_LIMIT
    config = SearchConfig(
        sort_field=args.sort_field or settings.SORT_FIELD,
        sort_order=args.order or settings.SORT_ORDER,
        display_limit=None if args.all else limit,
        fallback="strict" if args.strict else settings.FALLBACK,
    )
    searcher = NewsSearcher(config)
    try:
        items = _build_source(args.source).load()
    except (OSError, RuntimeError, ValueError) as exc:
        logging.getLogger(__name__).error("Failed to load news: %s", exc)
        console.print(f"Could not load news: {exc}", markup=False, highlight=False)
        return 1

    try:
        outcome = searcher.search(args.query, items)
    except ParseError as exc:
        console.print(format_parse_error(normalize_query(args.query), exc), markup=False, highlight=False)
        return 1

    console.print(build_result_text(outcome))
    return 0


def _check(args: argparse.Namespace) -> int:
    """Show how a query is tokenized and parsed, or where it is broken."""

    console = Console()
    query = normalize_query(args.query)
    try:
        parser = QueryParser(query)
        predicate = parser.parse()
    except ParseError as exc:
        console.print(format_parse_error(query, exc), markup=False, highlight=False)
        return 1

    for token in parser.tokens:
        console.print(f"{token.position:>4}  {token.type.value:<12} {token.value}", markup=False, highlight=False)
    console.print(predicate.describe(), markup=False, highlight=False)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="newslens")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search news titles")
    search_parser.add_argument("query", help='Boolean query, e.g. "測定 (掃除 OR -メンテナンス)"')
    search_parser.add_argument("--limit", type=_positive_int, help="Maximum number of results shown")
    search_parser.add_argument("--all", action="store_true", help="Show every match")
    search_parser.add_argument("--sort-field", choices=SORT_FIELDS)
    search_parser.add_argument("--order", choices=SORT_ORDERS)
    search_parser.add_argument("--strict", action="store_true", help="Fail on invalid queries")
    search_parser.add_argument("--source", help="JSON file path or feed URL")
    search_parser.add_argument("--no-banner", action="store_true")

    check_parser = subparsers.add_parser("check", help="Explain how a query is parsed")
    check_parser.add_argument("query")

    args = parser.parse_args(argv)
    _configure_logging()

    if args.command == "check":
        return _check(args)
    return _search(args)


if __name__ == "__main__":
    sys.exit(main())
