# filters.py
# Fuzzy matchers used to filter completion items against the typed word.
# Every matcher has the same shape: matcher(word, target) -> highlights or None.
#  - None means "no match"
#  - an empty tuple means "matched, nothing to highlight" (only for an empty word)
#  - otherwise a tuple of disjoint Highlight ranges ordered by start
# Matching is case-insensitive everywhere, case is only looked at again by the scorer.

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Tuple


class Highlight(NamedTuple):
    """Half-open range [start, end) of a label that matched the typed word."""
    start: int
    end: int


Highlights = Tuple[Highlight, ...]
Matcher = Callable[[str, str], Optional[Highlights]]

# camel case matching is recursive, very long words never look like camel humps
_MAX_CAMEL_CASE_WORD = 60


def equals_ignore_case(a: str, b: str) -> bool:
    """Char comparison that ignores case, one char on each side."""
    return a == b or a.lower() == b.lower()


def _starts_with_ignore_case(haystack: str, needle: str, at: int) -> bool:
    for k, ch in enumerate(needle):
        if not equals_ignore_case(haystack[at + k], ch):
            return False
    return True


def index_of_ignore_case(haystack: str,
                         needle: str,
                         start: int = 0,
                         haystack_lower: Optional[str] = None) -> int:
    """
    str.find that ignores case. Negative start is treated as 0.
    The index is into `haystack` itself: chars whose lowercase form is longer
    (e.g. "İ") are compared one by one so offsets never shift.
    `haystack_lower` may be passed when the caller already lowercased it.
    """
    start = max(0, start)
    if haystack_lower is None:
        haystack_lower = haystack.lower()
    needle_lower = needle.lower()
    if len(haystack_lower) == len(haystack) and len(needle_lower) == len(needle):
        return haystack_lower.find(needle_lower, start)

    for i in range(start, len(haystack) - len(needle) + 1):
        if _starts_with_ignore_case(haystack, needle, i):
            return i
    return -1


# basic matchers ----------------------------------------------------------------
def matches_prefix(word: str, target: str) -> Optional[Highlights]:
    """Case-insensitive prefix match."""
    if not target or len(target) < len(word):
        return None
    if not word:
        return ()
    if not _starts_with_ignore_case(target, word, 0):
        return None
    return (Highlight(0, len(word)),)


def matches_contiguous_substring(word: str, target: str) -> Optional[Highlights]:
    """Case-insensitive substring match, first occurrence wins."""
    if not word:
        return ()
    idx = index_of_ignore_case(target, word)
    if idx < 0:
        return None
    return (Highlight(idx, idx + len(word)),)


# camel case ---------------------------------------------------------------------
def _is_anchor(target: str, i: int) -> bool:
    """A word start: uppercase letter, digit, or the char after a separator."""
    ch = target[i]
    if ch.isupper() or ch.isdigit():
        return True
    return i > 0 and not target[i - 1].isalnum()


def _next_anchor(target: str, i: int) -> int:
    while i < len(target):
        if _is_anchor(target, i):
            return i
        i += 1
    return len(target)


def _join(head: Highlight, tail: Highlights) -> Highlights:
    # merge touching ranges so "fb" on "fooBar" stays two ranges but "foo" one
    if tail and head.end == tail[0].start:
        return (Highlight(head.start, tail[0].end),) + tail[1:]
    return (head,) + tail


_UNSEEN = object()


def _matches_camel_case(word: str, target: str, i: int, j: int, memo: dict) -> Optional[Highlights]:
    """
    Match word[i:] against target starting at target[j].
    Each char either continues the current hump (j + 1) or jumps to a later anchor.
    Results are memoized per (i, j), otherwise near misses on targets full of
    anchors ("AAAA...") backtrack exponentially.
    """
    if i == len(word):
        return ()
    if j == len(target):
        return None
    cached = memo.get((i, j), _UNSEEN)
    if cached is not _UNSEEN:
        return cached

    result = None
    if equals_ignore_case(word[i], target[j]):
        rest = _matches_camel_case(word, target, i + 1, j + 1, memo)
        nxt = j + 1
        while rest is None:
            nxt = _next_anchor(target, nxt)
            if nxt >= len(target):
                break
            rest = _matches_camel_case(word, target, i + 1, nxt, memo)
            nxt += 1
        if rest is not None:
            result = _join(Highlight(j, j + 1), rest)

    memo[(i, j)] = result
    return result


def matches_camel_case(word: str, target: str) -> Optional[Highlights]:
    """
    Camel case / word-start match, e.g. "fbb" on "fooBarBaz" or "gcv" on "get_cache_value".
    The first char of the word has to hit the start of the target or an anchor.
    """
    if not target:
        return None
    if not word:
        return ()
    if len(word) > _MAX_CAMEL_CASE_WORD:
        return None

    memo: dict = {}
    i = 0
    while i < len(target):
        result = _matches_camel_case(word, target, 0, i, memo)
        if result is not None:
            return result
        i = _next_anchor(target, i + 1)
    return None


# combinators -------------------------------------------------------------------
def or_filters(*filters: Matcher) -> Matcher:
    """Combine matchers, the first one that matches decides the highlights."""
    def _or(word: str, target: str) -> Optional[Highlights]:
        for f in filters:
            result = f(word, target)
            if result is not None:
                return result
        return None
    return _or


# default matcher used when neither the item nor its support brings one
fuzzy_contiguous_filter: Matcher = or_filters(
    matches_prefix,
    matches_camel_case,
    matches_contiguous_substring,
)
