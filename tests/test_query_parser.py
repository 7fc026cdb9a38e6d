from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from core.query_parser import And, Not, Or, Predicate, QueryParser, Word, compile_query, evaluate
from core.tokenizer import ParseError


def test_single_word() -> None:
    predicate = compile_query("測定")
    assert predicate("測定あり")
    assert not predicate("何もなし")


def test_implicit_and() -> None:
    predicate = compile_query("a b")
    for text in ["ab", "ba", "a", "b", "", "xyz"]:
        assert predicate(text) == ("a" in text and "b" in text)


def test_explicit_and_matches_implicit_and() -> None:
    implicit = compile_query("測定 掃除")
    explicit = compile_query("測定 AND 掃除")
    for text in ["測定と掃除", "測定のみ", "掃除のみ", "何もなし"]:
        assert implicit(text) == explicit(text)


def test_or() -> None:
    predicate = compile_query("測定 OR 掃除")
    assert predicate("測定と掃除")
    assert predicate("測定のみ")
    assert predicate("掃除のみ")
    assert not predicate("何もなし")


def test_not() -> None:
    predicate = compile_query("-測定")
    assert predicate("なし")
    assert not predicate("測定あり")


def test_and_with_not() -> None:
    predicate = compile_query("掃除 -測定")
    assert predicate("掃除のみ")
    assert not predicate("測定のみ")
    assert not predicate("掃除と測定")
    assert not predicate("何もなし")


def test_or_with_not() -> None:
    predicate = compile_query("掃除 OR -測定")
    assert predicate("掃除あり")
    assert not predicate("測定あり")
    assert predicate("何もなし")
    assert predicate("掃除あり測定あり")


def test_group_precedence() -> None:
    predicate = compile_query("測定 (掃除 OR -メンテナンス)")
    assert predicate("測定と掃除を実施")
    assert predicate("測定のみを実施")
    assert not predicate("測定とメンテナンス")


def test_group_then_not_then_word() -> None:
    predicate = compile_query("(測定 OR メンテナンス) -予告 掃除")
    assert predicate("測定と掃除")
    assert predicate("メンテナンスと掃除を実施")
    assert not predicate("予告付きの測定と掃除")
    assert not predicate("何もなし")


def test_and_binds_tighter_than_or() -> None:
    parser = QueryParser("a OR b AND c")
    assert parser.parse().root == Or(Word("a"), And(Word("b"), Word("c")))
    assert parser.parse().describe() == "(a OR (b AND c))"


def test_not_binds_tighter_than_and() -> None:
    assert compile_query("-a b").root == And(Not(Word("a")), Word("b"))


def test_negated_group() -> None:
    predicate = compile_query("-(a OR b)")
    assert predicate.root == Not(Or(Word("a"), Word("b")))
    assert predicate("c")
    assert not predicate("a")


def test_redundant_grouping() -> None:
    grouped = compile_query("((((w))))")
    plain = compile_query("w")
    assert grouped.root == plain.root
    for text in ["w", "www", "", "x"]:
        assert grouped(text) == plain(text)


def test_parse_is_repeatable() -> None:
    parser = QueryParser("a -b")
    first = parser.parse()
    second = parser.parse()
    assert first == second
    assert first is not second
    assert first("a") and not first("ab")


def test_operator_words_are_case_insensitive() -> None:
    assert compile_query("a or b").root == compile_query("a OR b").root
    assert compile_query("a And b").root == And(Word("a"), Word("b"))


def test_long_chains_evaluate_without_deep_recursion() -> None:
    words = [f"w{index}" for index in range(3000)]
    predicate = compile_query(" ".join(words))
    assert predicate(" ".join(words))
    assert not predicate("w1")
    assert compile_query(" OR ".join(words))("w2999")


def test_predicate_is_shareable_between_threads() -> None:
    predicate = compile_query("測定 (掃除 OR -メンテナンス)")
    texts = ["測定と掃除を実施", "測定のみを実施", "測定とメンテナンス"] * 50
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(predicate, texts))
    assert results == [True, True, False] * 50


def test_evaluate_rejects_unknown_nodes() -> None:
    with pytest.raises(TypeError):
        evaluate("not a node", "text")  # type: ignore[arg-type]


def test_predicate_wraps_hand_built_tree() -> None:
    predicate = Predicate(Or(Word("x"), Not(Word("y"))))
    assert predicate("x y")
    assert predicate("z")
    assert not predicate("y")


@pytest.mark.parametrize(
    "query, position",
    [
        ("a) b", 1),
        ("a (b", 2),
        ("()", 0),
        ("a ()", 2),
        ("a -", 2),
        ("a AND OR", 6),
        ("a OR AND", 5),
        ("AND a", 0),
        ("OR a", 0),
        ("a AND", 2),
        ("a b OR", 4),
        ("(AND a)", 1),
        ("(a OR)", 3),
        ("aaa -and", 4),
        ("aaa -or", 4),
        ("(aaa -)", 5),
        ("", 0),
        ("　", 0),
    ],
)
def test_invalid_queries(query: str, position: int) -> None:
    with pytest.raises(ParseError) as excinfo:
        QueryParser(query).parse()
    assert excinfo.value.position == position


def test_structural_errors_raise_at_construction() -> None:
    with pytest.raises(ParseError):
        QueryParser("a (b")


def test_nesting_limit_is_enforced() -> None:
    QueryParser("((a))", max_depth=2).parse()
    with pytest.raises(ParseError):
        QueryParser("(((a)))", max_depth=2).parse()


def test_error_message_mentions_position() -> None:
    with pytest.raises(ParseError) as excinfo:
        QueryParser("a OR AND").parse()
    assert excinfo.value.message == "Operator 'AND' is missing an operand"
    assert "position 5" in str(excinfo.value)
