"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

SORT_FIELDS = ("news_date", "updated")
SORT_ORDERS = ("asc", "desc")
FALLBACK_MODES = ("substring", "strict")


@dataclass(frozen=True)
class SearchConfig:
    """Search settings for the news searcher.

    - sort_field: "news_date" or "updated"
    - sort_order: "asc" or "desc"
    - display_limit: maximum items returned, or None for all
    - fallback: "substring" degrades a rejected query to a plain substring
      search, "strict" lets the ParseError propagate
    """

    sort_field: str = "news_date"
    sort_order: str = "desc"
    display_limit: Optional[int] = 10
    fallback: str = "substring"

    def __post_init__(self) -> None:
        if self.sort_field not in SORT_FIELDS:
            raise ValueError(f"Unsupported sort field: {self.sort_field}")
        if self.sort_order not in SORT_ORDERS:
            raise ValueError(f"Unsupported sort order: {self.sort_order}")
        if self.display_limit is not None and self.display_limit <= 0:
            raise ValueError(f"display_limit must be positive, got {self.display_limit}")
        if self.fallback not in FALLBACK_MODES:
            raise ValueError(f"Unsupported fallback mode: {self.fallback}")
