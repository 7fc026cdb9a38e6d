"""Text normalization shared by queries and candidate texts (core domain)."""

from __future__ import annotations

# Full-width parentheses stay as-is so they never turn into grouping syntax.
_KEEP_FULL_WIDTH = {0xFF08, 0xFF09}

_FULL_WIDTH_START = 0xFF01
_FULL_WIDTH_END = 0xFF5E
_FULL_WIDTH_OFFSET = 0xFEE0

_KATAKANA_START = 0x30A1
_KATAKANA_END = 0x30F6
_KATAKANA_OFFSET = 0x60


def _lower_ascii(code: int) -> int:
    if 0x41 <= code <= 0x5A:
        return code + 0x20
    return code


def _build_char_table() -> dict[int, int]:
    """Build the per-character translation table.

    Width folding is composed with ASCII lowercasing so a single pass over the
    input applies both, e.g. full-width "Ａ" maps straight to "a".
    """

    table: dict[int, int] = {}
    for code in range(_FULL_WIDTH_START, _FULL_WIDTH_END + 1):
        if code in _KEEP_FULL_WIDTH:
            continue
        table[code] = _lower_ascii(code - _FULL_WIDTH_OFFSET)
    for code in range(_KATAKANA_START, _KATAKANA_END + 1):
        table[code] = code - _KATAKANA_OFFSET
    for code in range(0x41, 0x5B):
        table[code] = _lower_ascii(code)
    return table


_CHAR_TABLE = _build_char_table()


def normalize(text: str) -> str:
    """Return the canonical form of ``text`` used for matching.

    Full-width ASCII becomes half-width, katakana becomes hiragana, every
    whitespace character is removed and ASCII letters are lowercased.
    """

    converted = text.translate(_CHAR_TABLE)
    # str.split() with no separator covers the ideographic space too.
    return "".join(converted.split())


def normalize_query(query: str) -> str:
    """Normalize a query while keeping its terms apart.

    ``normalize`` deletes whitespace, which would glue query terms together,
    so each whitespace-separated segment is normalized on its own and the
    segments are rejoined with a single space.
    """

    return " ".join(normalize(segment) for segment in query.split())
