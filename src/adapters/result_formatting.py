"""Shared result formatting helpers.

Keeping formatting here keeps the CLI output and error diagnostics consistent
regardless of where the news came from.
"""

from __future__ import annotations

from rich.text import Text

from core.dates import format_iso_date, parse_news_date
from core.models import NewsItem, SearchOutcome
from core.tokenizer import ParseError


def format_news_line(item: NewsItem) -> str:
    """Return "[YYYY-MM-DD] title", keeping the raw date when unparsable."""

    try:
        date_label = format_iso_date(parse_news_date(item.news_date))
    except ValueError:
        date_label = item.news_date
    return f"[{date_label}] {item.title}"


def format_parse_error(query: str, error: ParseError) -> str:
    """Render the error with a caret under the offending character."""

    # Clamp so end-of-query positions still get a visible caret.
    position = max(0, min(error.position, len(query)))
    lines = [
        f"Invalid query: {error.message}",
        f"  {query}",
        "  " + " " * position + "^",
    ]
    return "\n".join(lines)


def build_result_text(outcome: SearchOutcome) -> Text:
    """Build the rich Text block printed by the CLI."""

    text = Text()
    if outcome.fallback_used and outcome.error is not None:
        text.append(
            f"Query rejected ({outcome.error.message}); showing plain substring matches.\n",
            style="yellow",
        )

    text.append(
        f"{outcome.total_matches} match(es), showing {len(outcome.items)}\n",
        style="bold",
    )
    for item in outcome.items:
        text.append(format_news_line(item))
        text.append("\n")
        text.append(f"    {item.target_url}\n", style="dim")
    return text
