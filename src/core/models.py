"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the feed's JSON shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from core.tokenizer import ParseError


@dataclass(frozen=True)
class NewsItem:
    """One entry of the news feed."""

    target_url: str
    title: str
    news_date: str
    updated: str


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one search over a batch of news items."""

    query: str
    items: List[NewsItem]
    total_matches: int
    fallback_used: bool
    error: Optional[ParseError]
