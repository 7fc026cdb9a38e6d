"""Date helpers for news records (core domain)."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

# The feed writes dates like "2024年01月31日 15時00分00秒".
_NEWS_DATE_PATTERN = re.compile(r"(\d{4})年(\d{2})月(\d{2})日 (\d{2})時(\d{2})分(\d{2})秒")


def parse_news_date(value: str) -> datetime:
    """Parse the feed's Japanese ``newsDate`` format."""

    match = _NEWS_DATE_PATTERN.search(value)
    if not match:
        raise ValueError(f"Invalid news date: {value!r}")
    year, month, day, hours, minutes, seconds = (int(part) for part in match.groups())
    return datetime(year, month, day, hours, minutes, seconds)


def parse_updated(value: str) -> datetime:
    """Parse an ISO-8601 ``updated`` timestamp as naive UTC.

    Aware and naive values are mixed in the wild; converting aware ones to
    naive UTC keeps every result comparable.
    """

    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid updated timestamp: {value!r}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_iso_date(value: Optional[datetime] = None) -> str:
    """Return ``YYYY-MM-DD`` for ``value``, or for today when omitted."""

    if value is None:
        value = datetime.now()
    return value.strftime("%Y-%m-%d")
