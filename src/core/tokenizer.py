"""Query tokenizer and implicit-AND insertion (core domain).

Tokens carry the offset of their first character in the query so every
error can point at the exact spot the user needs to fix.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

# Parser recursion grows by a few frames per nesting level.
MAX_NESTING_DEPTH = 128

NOT_CHAR = "-"


class TokenType(Enum):
    WORD = "WORD"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"


@dataclass(frozen=True)
class Token:
    """A single lexical token of a query."""

    type: TokenType
    value: str
    position: int


class ParseError(Exception):
    """Raised when a query is structurally invalid."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (at position {position})")
        self.message = message
        self.position = position


_OPERATOR_WORDS = {"AND": TokenType.AND, "OR": TokenType.OR}

# Left operands end with these; right operands start with these.
_ENDS_OPERAND = {TokenType.WORD, TokenType.RIGHT_PAREN}
_STARTS_OPERAND = {TokenType.WORD, TokenType.NOT, TokenType.LEFT_PAREN}


def _is_boundary(char: str) -> bool:
    return char.isspace() or char in "()"


def _has_not_left_context(query: str, index: int) -> bool:
    if index == 0:
        return True
    previous = query[index - 1]
    return previous.isspace() or previous == "("


def _has_not_operand(query: str, index: int) -> bool:
    if index + 1 >= len(query):
        return False
    following = query[index + 1]
    return not (following.isspace() or following == ")" or following == NOT_CHAR)


def _classify_word(word: str) -> TokenType:
    return _OPERATOR_WORDS.get(word.upper(), TokenType.WORD)


def tokenize(query: str, max_depth: int = MAX_NESTING_DEPTH) -> List[Token]:
    """Scan ``query`` into positioned tokens.

    Parentheses are balanced here, so later stages never see an unmatched
    one. A ``-`` only negates when it sits at the start of a term and is
    glued to its operand; ``a-b`` and ``--a`` are plain words.
    """

    tokens: List[Token] = []
    open_parens: List[int] = []
    length = len(query)
    index = 0

    while index < length:
        char = query[index]

        if char.isspace():
            index += 1
            continue

        if char == "(":
            open_parens.append(index)
            if len(open_parens) > max_depth:
                raise ParseError(f"Parentheses nested deeper than {max_depth} levels", index)
            tokens.append(Token(TokenType.LEFT_PAREN, char, index))
            index += 1
            continue

        if char == ")":
            if not open_parens:
                raise ParseError("Unmatched ')'", index)
            open_parens.pop()
            tokens.append(Token(TokenType.RIGHT_PAREN, char, index))
            index += 1
            continue

        if char == NOT_CHAR and _has_not_left_context(query, index):
            if _has_not_operand(query, index):
                tokens.append(Token(TokenType.NOT, char, index))
                index += 1
                continue
            following = query[index + 1] if index + 1 < length else ""
            if following != NOT_CHAR:
                # A bare "-" in term position is rejected rather than matched literally.
                raise ParseError("'-' must be directly followed by a term", index)

        start = index
        while index < length and not _is_boundary(query[index]):
            index += 1
        word = query[start:index]
        tokens.append(Token(_classify_word(word), word, start))

    if open_parens:
        raise ParseError("Unmatched '('", open_parens[0])

    return tokens


def insert_implicit_ands(tokens: Iterable[Token]) -> List[Token]:
    """Make adjacency mean conjunction: ``a b`` becomes ``a AND b``."""

    result: List[Token] = []
    for token in tokens:
        if result and result[-1].type in _ENDS_OPERAND and token.type in _STARTS_OPERAND:
            result.append(Token(TokenType.AND, "AND", token.position))
        result.append(token)
    return result
