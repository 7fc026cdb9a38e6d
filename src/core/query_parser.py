"""Recursive-descent query parser and predicate evaluator (core domain).

Grammar, loosest binding first::

    Expression := AndExpr (OR AndExpr)*
    AndExpr    := NotExpr (AND NotExpr)*
    NotExpr    := NOT? Primary
    Primary    := WORD | LEFT_PAREN Expression RIGHT_PAREN

The parser builds an immutable tree of ``Word``/``And``/``Or``/``Not`` nodes.
Evaluation never normalizes: callers pass text that went through the same
``normalize`` step as the query.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Type, Union

from core.tokenizer import (
    MAX_NESTING_DEPTH,
    ParseError,
    Token,
    TokenType,
    insert_implicit_ands,
    tokenize,
)


@dataclass(frozen=True)
class Word:
    literal: str


@dataclass(frozen=True)
class And:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Or:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Not:
    operand: "Node"


Node = Union[Word, And, Or, Not]


def _chain(node: Node, kind: Type[Union[And, Or]]) -> List[Node]:
    """Flatten a left-deep run of ``kind`` nodes into its operands, in order."""

    right_operands: List[Node] = []
    while isinstance(node, kind):
        right_operands.append(node.right)
        node = node.left
    right_operands.append(node)
    right_operands.reverse()
    return right_operands


def evaluate(node: Node, text: str) -> bool:
    """Return whether ``text`` satisfies the tree rooted at ``node``."""

    if isinstance(node, Word):
        return node.literal in text
    if isinstance(node, Not):
        return not evaluate(node.operand, text)
    if isinstance(node, And):
        return all(evaluate(operand, text) for operand in _chain(node, And))
    if isinstance(node, Or):
        return any(evaluate(operand, text) for operand in _chain(node, Or))
    raise TypeError(f"Unsupported query node: {node!r}")


def describe(node: Node) -> str:
    """Render ``node`` fully parenthesized, e.g. ``(a AND (NOT b))``."""

    if isinstance(node, Word):
        return node.literal
    if isinstance(node, Not):
        return f"(NOT {describe(node.operand)})"
    if isinstance(node, And):
        return "(" + " AND ".join(describe(operand) for operand in _chain(node, And)) + ")"
    if isinstance(node, Or):
        return "(" + " OR ".join(describe(operand) for operand in _chain(node, Or)) + ")"
    raise TypeError(f"Unsupported query node: {node!r}")


@dataclass(frozen=True)
class Predicate:
    """A compiled query. Immutable and safe to call from any thread."""

    root: Node

    def __call__(self, text: str) -> bool:
        return evaluate(self.root, text)

    def describe(self) -> str:
        return describe(self.root)


class QueryParser:
    """Compile one query string into predicates.

    Tokenizing happens in the constructor, so a structurally broken query
    fails before ``parse`` is ever called. ``parse`` only moves a read
    cursor over the immutable token tuple; do not share one instance between
    threads that parse concurrently.
    """

    def __init__(self, query: str, max_depth: int = MAX_NESTING_DEPTH) -> None:
        self._max_depth = max_depth
        self._tokens: Tuple[Token, ...] = tuple(insert_implicit_ands(tokenize(query, max_depth)))
        self._cursor = 0

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._tokens

    def parse(self) -> Predicate:
        """Build a fresh predicate tree from the token stream."""

        self._cursor = 0
        if not self._tokens:
            raise ParseError("Query is empty", 0)

        root = self._parse_expression(depth=0)

        leftover = self._peek()
        if leftover is not None:
            raise ParseError(f"Unexpected {leftover.value!r}", leftover.position)
        return Predicate(root)

    def _peek(self) -> Optional[Token]:
        if self._cursor < len(self._tokens):
            return self._tokens[self._cursor]
        return None

    def _advance(self) -> Token:
        token = self._tokens[self._cursor]
        self._cursor += 1
        return token

    def _parse_expression(self, depth: int, owner: Optional[Token] = None) -> Node:
        node = self._parse_and(depth, owner)
        while self._peek_is(TokenType.OR):
            operator = self._advance()
            node = Or(node, self._parse_and(depth, operator))
        return node

    def _parse_and(self, depth: int, owner: Optional[Token]) -> Node:
        node = self._parse_not(depth, owner)
        while self._peek_is(TokenType.AND):
            operator = self._advance()
            node = And(node, self._parse_not(depth, operator))
        return node

    def _parse_not(self, depth: int, owner: Optional[Token]) -> Node:
        if not self._peek_is(TokenType.NOT):
            return self._parse_primary(depth, owner)

        negation = self._advance()
        operand = self._peek()
        if operand is None or operand.type in (TokenType.AND, TokenType.OR, TokenType.RIGHT_PAREN):
            raise ParseError("'-' must be directly followed by a term", negation.position)
        return Not(self._parse_primary(depth, negation))

    def _parse_primary(self, depth: int, owner: Optional[Token]) -> Node:
        """Parse a word or a parenthesized group.

        ``owner`` is the token that demanded this operand (an operator, a
        ``-`` or an opening parenthesis); a missing operand is reported at
        the owner's position.
        """

        token = self._peek()
        if token is None:
            if owner is None:
                raise ParseError("Query is empty", 0)
            raise ParseError(f"Expected a term after {owner.value!r}", owner.position)

        if token.type is TokenType.WORD:
            self._advance()
            return Word(token.value)

        if token.type is TokenType.LEFT_PAREN:
            return self._parse_group(depth)

        if token.type in (TokenType.AND, TokenType.OR):
            raise ParseError(f"Operator {token.value!r} is missing an operand", token.position)

        if token.type is TokenType.RIGHT_PAREN and owner is not None:
            raise ParseError(f"Expected a term after {owner.value!r}", owner.position)

        raise ParseError(f"Unexpected {token.value!r}", token.position)

    def _parse_group(self, depth: int) -> Node:
        opening = self._advance()
        if depth + 1 > self._max_depth:
            raise ParseError(f"Parentheses nested deeper than {self._max_depth} levels", opening.position)
        if self._peek_is(TokenType.RIGHT_PAREN):
            raise ParseError("Empty group '()'", opening.position)

        inner = self._parse_expression(depth + 1, opening)

        if not self._peek_is(TokenType.RIGHT_PAREN):
            raise ParseError("Unclosed '('", opening.position)
        self._advance()
        return inner

    def _peek_is(self, token_type: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type is token_type


def compile_query(query: str) -> Predicate:
    """Shortcut for ``QueryParser(query).parse()``."""

    return QueryParser(query).parse()
