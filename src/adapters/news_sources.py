"""News source adapters.

Implements the core NewsSourcePort for a local JSON file and for the remote
feed, both sharing the same payload validation.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any, List
from urllib.parse import urljoin

from core.models import NewsItem

LOGGER = logging.getLogger(__name__)

# The feed lists article links relative to the game site.
DEFAULT_BASE_URL = "https://kemono-friends-3.jp"

# Feed key -> NewsItem field.
_FIELDS = {
    "targetUrl": "target_url",
    "title": "title",
    "newsDate": "news_date",
    "updated": "updated",
}


def build_news_item(raw: Any, index: int, base_url: str = DEFAULT_BASE_URL) -> NewsItem:
    """Validate one raw feed entry and map it onto a NewsItem.

    Relative ``targetUrl`` values are joined onto ``base_url``; absolute ones
    are kept as they are.
    """

    if not isinstance(raw, dict):
        raise ValueError(f"news[{index}] must be an object")

    values: dict[str, str] = {}
    for key, field_name in _FIELDS.items():
        value = raw.get(key)
        if not isinstance(value, str):
            raise ValueError(f"news[{index}].{key} must be a string")
        values[field_name] = value
    values["target_url"] = urljoin(base_url.rstrip("/") + "/", values["target_url"])
    return NewsItem(**values)


def parse_news_payload(payload: Any, base_url: str = DEFAULT_BASE_URL) -> List[NewsItem]:
    """Accept either {"news": [...]} or a bare list of entries."""

    if isinstance(payload, dict):
        payload = payload.get("news")
    if not isinstance(payload, list):
        raise ValueError("News payload must be a list or an object with a 'news' list")
    return [build_news_item(raw, index, base_url) for index, raw in enumerate(payload)]


class JsonFileNewsSource:
    """Loads news items from a UTF-8 JSON file on disk."""

    def __init__(self, path: str, base_url: str = DEFAULT_BASE_URL) -> None:
        self._path = path
        self._base_url = base_url

    def load(self) -> List[NewsItem]:
        with open(self._path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
        items = parse_news_payload(payload, self._base_url)
        LOGGER.info("Loaded %s news items from %s", len(items), self._path)
        return items


class HttpNewsSource:
    """Loads news items from the remote feed with a blocking GET."""

    def __init__(self, url: str, timeout: float = 10, base_url: str = DEFAULT_BASE_URL) -> None:
        self._url = url
        self._timeout = timeout
        self._base_url = base_url

    def load(self) -> List[NewsItem]:
        request = urllib.request.Request(self._url, method="GET")
        request.add_header("Accept", "application/json")
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")
            raise RuntimeError(f"News feed error {e.code}: {detail}") from e

        items = parse_news_payload(json.loads(body), self._base_url)
        LOGGER.info("Fetched %s news items from %s", len(items), self._url)
        return items
