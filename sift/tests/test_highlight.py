"""Tests for query-word highlighting."""

from sift.core.highlight import DEFAULT_MARKER, highlight_matches, match_spans

MARK = ("[", "]")


def test_no_occurrence_returns_text_unchanged():
    text = "Buy birthday present"
    assert highlight_matches(text, "report") == text
    assert highlight_matches(text, "") == text
    assert highlight_matches(text, "   ") == text


def test_case_insensitive_keeps_original_case():
    assert highlight_matches("Report and REPORT", "report", MARK) == "[Report] and [REPORT]"


def test_default_marker():
    open_tag, close_tag = DEFAULT_MARKER
    assert highlight_matches("quarterly report", "report") == f"quarterly {open_tag}report{close_tag}"


def test_each_word_independently():
    assert highlight_matches("call the bank", "call bank", MARK) == "[call] the [bank]"


def test_words_apply_cumulatively():
    # the second word also matches inside text already marked by the first
    assert highlight_matches("Hello", "hello l", MARK) == "[He[l][l]o]"


def test_regex_characters_escaped():
    assert highlight_matches("Learn C++ (fast)", "c++ (fast)", MARK) == "Learn [C++] [(fast)]"
    assert highlight_matches("a.b axb", "a.b", MARK) == "[a.b] axb"


def test_match_spans_over_raw_text():
    assert match_spans("Fix [b] tag", "[b] tag") == [(4, 7), (8, 11)]
    assert match_spans("Report report", "REPORT") == [(0, 6), (7, 13)]
    assert match_spans("nothing here", "zzz") == []
