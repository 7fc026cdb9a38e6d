"""News search orchestration.

This module is the caller of the query core: it owns the normalization
discipline and the fallback policy for rejected queries, then filters, sorts
and trims news items. It never touches files, HTTP or the terminal.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from core.config import SearchConfig
from core.dates import parse_news_date, parse_updated
from core.models import NewsItem, SearchOutcome
from core.normalizer import normalize, normalize_query
from core.query_parser import QueryParser
from core.tokenizer import ParseError

LOGGER = logging.getLogger(__name__)

TextPredicate = Callable[[str], bool]


def _match_all(text: str) -> bool:
    return True


def _substring_predicate(needle: str) -> TextPredicate:
    def _contains(text: str) -> bool:
        return needle in text

    return _contains


class NewsSearcher:
    """Filters news items by a boolean title query."""

    def __init__(self, config: SearchConfig) -> None:
        self._config = config

    def compile(self, query: str) -> Tuple[TextPredicate, bool, Optional[ParseError]]:
        """Return (predicate, fallback_used, error) for a raw user query.

        An empty query matches everything. In "strict" mode a rejected query
        raises; in "substring" mode it degrades to a plain substring search
        for the normalized query.
        """

        normalized_query = normalize_query(query)
        if not normalized_query:
            return _match_all, False, None

        try:
            return QueryParser(normalized_query).parse(), False, None
        except ParseError as exc:
            if self._config.fallback == "strict":
                raise
            LOGGER.warning(
                "Query %r rejected at position %s (%s); falling back to substring search",
                normalized_query,
                exc.position,
                exc.message,
            )
            return _substring_predicate(normalize(query)), True, exc

    def search(self, query: str, items: Iterable[NewsItem]) -> SearchOutcome:
        """Run one query over ``items`` and return the sorted, trimmed result."""

        predicate, fallback_used, error = self.compile(query)
        matched = [item for item in items if predicate(normalize(item.title))]
        ordered = self._sort(matched)

        limit = self._config.display_limit
        visible = ordered if limit is None else ordered[:limit]
        LOGGER.info("Query %r matched %s items (%s shown)", query, len(matched), len(visible))

        return SearchOutcome(
            query=query,
            items=visible,
            total_matches=len(matched),
            fallback_used=fallback_used,
            error=error,
        )

    def _sort_key(self, item: NewsItem) -> Optional[datetime]:
        try:
            if self._config.sort_field == "updated":
                return parse_updated(item.updated)
            return parse_news_date(item.news_date)
        except ValueError:
            LOGGER.warning("Unparsable %s for %s; sorting it last", self._config.sort_field, item.target_url)
            return None

    def _sort(self, items: List[NewsItem]) -> List[NewsItem]:
        # Items without a usable date always go last, whatever the order.
        dated: List[Tuple[datetime, NewsItem]] = []
        undated: List[NewsItem] = []
        for item in items:
            key = self._sort_key(item)
            if key is None:
                undated.append(item)
            else:
                dated.append((key, item))

        dated.sort(key=lambda pair: pair[0], reverse=self._config.sort_order == "desc")
        return [item for _, item in dated] + undated
