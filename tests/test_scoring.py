# tests/test_scoring.py
# unit tests for highlight based scoring

from completion_ranker.core.filters import Highlight
from completion_ranker.core.scoring import (
    BASE,
    ScoreFactors,
    combine,
    score_by_highlight,
    score_factors,
)


def test_no_highlights_scores_zero():
    assert score_by_highlight("foo", None, "foo") == 0
    assert score_by_highlight("foo", (), "foo") == 0
    assert score_factors("foo", None, "foo") is None


def test_factors_exact_and_wrong_case():
    hl = (Highlight(0, 3),)
    assert score_factors("fooBar", hl, "foo") == ScoreFactors(3, 0, 0, 1, 3, False)
    assert score_factors("FooBaz", hl, "foo") == ScoreFactors(2, 1, 0, 1, 3, False)


def test_combined_value():
    # 3*100^4 + 0 + 100^2*(100-0) + 100*(100-1) + (100-3)
    assert score_by_highlight("fooBar", (Highlight(0, 3),), "foo") == 301009997


def test_any_match_scores_above_zero():
    # alignment fails ("foo" is not in "bar") but it's still a match
    factors = score_factors("foo", (Highlight(0, 3),), "bar")
    assert factors == ScoreFactors(0, 0, 0, 1, 0, False)
    assert score_by_highlight("foo", (Highlight(0, 3),), "bar") > 0


def test_more_exact_case_matches_dominate():
    # b: later first match, more fragments, more unmatched chars but 2 exact-case hits
    a = score_by_highlight("AB", (Highlight(0, 2),), "ab")
    b = score_by_highlight("zzzzab", (Highlight(4, 5), Highlight(5, 6)), "ab")
    assert score_factors("AB", (Highlight(0, 2),), "ab").case_sensitive == 0
    assert b > a


def test_tie_break_order():
    word = "ab"
    earlier = score_by_highlight("abxx", (Highlight(0, 2),), word)
    later = score_by_highlight("xxab", (Highlight(2, 4),), word)
    assert earlier > later

    contiguous = score_by_highlight("abxx", (Highlight(0, 2),), word)
    split = score_by_highlight("abxx", (Highlight(0, 1), Highlight(1, 2)), word)
    assert contiguous > split

    shorter = score_by_highlight("ab", (Highlight(0, 2),), word)
    longer = score_by_highlight("abxx", (Highlight(0, 2),), word)
    assert shorter > longer


def test_alignment_is_monotonic():
    # second "a" must be found after the first one, "ab" has only one
    factors = score_factors("abab", (Highlight(0, 1), Highlight(2, 3)), "ab")
    assert factors == ScoreFactors(1, 0, 0, 2, 2, False)


def test_long_label_is_degraded():
    factors = score_factors("a" * 150, (Highlight(0, 1),), "a")
    assert factors.degraded
    assert factors.not_matching == BASE - 1
    assert combine(factors) > 0


def test_highlight_past_window():
    label = "x" * 120 + "foo"
    factors = score_factors(label, (Highlight(120, 123),), "foo")
    assert factors == ScoreFactors(0, 0, BASE, 1, BASE, True)
    assert combine(factors) == BASE * (BASE - 1)


def test_wider_base_keeps_long_labels_exact():
    label = "x" * 120 + "foo"
    factors = score_factors(label, (Highlight(120, 123),), "foo", base=1000)
    assert factors == ScoreFactors(3, 0, 120, 1, 120, False)


def test_alignment_with_longer_lowercase_chars():
    # word "İfoo": "foo" sits at index 1 of the word, not at index 2 of its lowercase form
    factors = score_factors("foo", (Highlight(0, 3),), "İfoo")
    assert factors == ScoreFactors(3, 0, 0, 1, 0, False)
