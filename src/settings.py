"""Static configuration for newslens.

All user-editable settings (news source, search defaults, logging) live in a
single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# NEWSLENS_CONFIG may come from a local .env file.
load_dotenv()
CONFIG_PATH = os.getenv("NEWSLENS_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path):
    if path and not os.path.isabs(path):
        return os.path.join(PROJECT_ROOT, path)
    return path


_CONFIG = _load_json_config()

# News source: a local JSON file wins over the remote feed URL.
_source = _CONFIG.get("source", {})
SOURCE_PATH = _resolve_path(_source.get("path"))
SOURCE_URL = _source.get("url")
SOURCE_TIMEOUT = float(_source.get("timeout", 10))
# Relative article links in the feed are joined onto this host.
SOURCE_BASE_URL = _source.get("base_url", "https://kemono-friends-3.jp")

# Search defaults, overridable per run from the CLI.
# - SORT_FIELD: "news_date" or "updated"
# - SORT_ORDER: "asc" or "desc"
# - DISPLAY_LIMIT: items shown per search; null shows everything
# - FALLBACK: "substring" or "strict" handling of rejected queries
_search = _CONFIG.get("search", {})
SORT_FIELD = _search.get("sort_field", "news_date")
SORT_ORDER = _search.get("sort_order", "desc")
_limit = _search.get("display_limit", 10)
DISPLAY_LIMIT = int(_limit) if _limit is not None else None
FALLBACK = _search.get("fallback", "substring")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
