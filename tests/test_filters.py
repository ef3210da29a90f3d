# tests/test_filters.py
# unit tests for the default fuzzy matchers

import time

import pytest

from completion_ranker.core.filters import (
    Highlight,
    fuzzy_contiguous_filter,
    index_of_ignore_case,
    matches_camel_case,
    matches_contiguous_substring,
    matches_prefix,
    or_filters,
)


def test_prefix_ignores_case():
    assert matches_prefix("foo", "fooBar") == (Highlight(0, 3),)
    assert matches_prefix("FOO", "fooBar") == (Highlight(0, 3),)


def test_prefix_rejects():
    assert matches_prefix("bar", "fooBar") is None
    assert matches_prefix("abc", "ab") is None
    assert matches_prefix("a", "") is None


def test_empty_word_matches_without_highlights():
    # distinct from None: an empty word matches everything
    assert matches_prefix("", "fooBar") == ()
    assert matches_camel_case("", "fooBar") == ()
    assert fuzzy_contiguous_filter("", "anything") == ()


def test_contiguous_substring():
    assert matches_contiguous_substring("bar", "fooBar") == (Highlight(3, 6),)
    assert matches_contiguous_substring("baz", "fooBar") is None


def test_camel_case_humps():
    assert matches_camel_case("fb", "fooBar") == (Highlight(0, 1), Highlight(3, 4))
    assert matches_camel_case("fbb", "fooBarBaz") == (
        Highlight(0, 1), Highlight(3, 4), Highlight(6, 7))


def test_camel_case_after_separator():
    assert matches_camel_case("gcv", "get_cache_value") == (
        Highlight(0, 1), Highlight(4, 5), Highlight(10, 11))


def test_camel_case_joins_adjacent_ranges():
    assert matches_camel_case("foob", "fooBar") == (Highlight(0, 4),)


def test_camel_case_needs_anchor():
    # 'z' is inside a hump, not at a word start
    assert matches_camel_case("fbz", "fooBarBaz") is None


def test_camel_case_long_word_never_matches():
    word = "a" * 61
    assert matches_camel_case(word, word) is None


def test_fuzzy_contiguous_filter_order():
    # prefix first
    assert fuzzy_contiguous_filter("foo", "FooBaz") == (Highlight(0, 3),)
    # then camel case
    assert fuzzy_contiguous_filter("fb", "fooBar") == (Highlight(0, 1), Highlight(3, 4))
    # then substring
    assert fuzzy_contiguous_filter("oba", "fooBar") == (Highlight(2, 5),)
    assert fuzzy_contiguous_filter("xyz", "fooBar") is None


def test_or_filters_first_match_wins():
    calls = []

    def never(word, target):
        calls.append("never")
        return None

    def always(word, target):
        calls.append("always")
        return (Highlight(0, 1),)

    def unreachable(word, target):
        pytest.fail("should not be called")

    combined = or_filters(never, always, unreachable)
    assert combined("x", "xyz") == (Highlight(0, 1),)
    assert calls == ["never", "always"]


def test_index_of_ignore_case():
    assert index_of_ignore_case("fooBar", "BAR") == 3
    assert index_of_ignore_case("fooBar", "bar", 4) == -1
    assert index_of_ignore_case("fooBar", "foo", -1) == 0
    assert index_of_ignore_case("fooBar", "bar", 0, "foobar") == 3


def test_camel_case_near_miss_on_caps_is_fast():
    # every char of the target is an anchor, the final "b" never matches
    word = "a" * 20 + "b"
    target = "A" * 40
    t0 = time.perf_counter()
    assert matches_camel_case(word, target) is None
    assert fuzzy_contiguous_filter("e" * 9 + "x", "E" * 20) is None
    assert time.perf_counter() - t0 < 1.0


def test_offsets_survive_chars_with_longer_lowercase():
    # "İ".lower() is two chars, indices must still point into the original string
    assert index_of_ignore_case("İfoo", "foo") == 1
    assert matches_contiguous_substring("foo", "İfoo") == (Highlight(1, 4),)
    assert matches_prefix("İf", "İfoo") == (Highlight(0, 2),)
