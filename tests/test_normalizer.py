from __future__ import annotations

from core.normalizer import normalize, normalize_query


def test_lowercases_ascii_letters() -> None:
    assert normalize("ABCxyz") == "abcxyz"


def test_full_width_ascii_becomes_half_width() -> None:
    assert normalize("Ａ１") == "a1"
    assert normalize("！＃＄％＆＊＋，－．／：；＜＝＞？＠［＼］＾＿｀｛｜｝～") == "!#$%&*+,-./:;<=>?@[\\]^_`{|}~"


def test_full_width_parentheses_are_kept() -> None:
    assert normalize("（") == "（"
    assert normalize("（ＡＢ）") == "（ab）"


def test_katakana_becomes_hiragana() -> None:
    assert normalize("ア") == "あ"
    assert normalize("メンテナンス") == "めんてなんす"
    assert normalize("ァガパヴヶ") == "ぁがぱゔゖ"


def test_removes_every_whitespace_character() -> None:
    assert normalize("　 　 あイう　　  ") == "あいう"
    assert normalize("a b\tc\nd") == "abcd"


def test_leaves_other_scripts_alone() -> None:
    assert normalize("測定ÄÖ") == "測定ÄÖ"


def test_is_idempotent() -> None:
    samples = [
        "",
        "ＡＢＣ　ｄｅｆ",
        "カタカナとひらがな",
        "（測定） OR －メンテナンス",
        "MiXeD Case　Text",
        "ｶﾀｶﾅ",
    ]
    for sample in samples:
        once = normalize(sample)
        assert normalize(once) == once


def test_normalize_query_keeps_terms_apart() -> None:
    assert normalize_query("測定　ＯＲ  メンテナンス") == "測定 or めんてなんす"
    assert normalize_query("  ") == ""


def test_normalize_query_turns_full_width_minus_into_not() -> None:
    assert normalize_query("－予告") == "-予告"
