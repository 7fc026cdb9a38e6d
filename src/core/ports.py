"""Ports (interfaces) used by the core.

Ports define the minimal contracts for news source adapters so that the
core can be reused with different backends.
"""

from __future__ import annotations

from typing import List, Protocol

from core.models import NewsItem


class NewsSourcePort(Protocol):
    """Loads the full batch of news items to search."""

    def load(self) -> List[NewsItem]:
        ...
