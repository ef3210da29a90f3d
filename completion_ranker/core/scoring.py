# completion_ranker/core/scoring.py
"""
Highlight based scoring of completion items.

Five values are read off the highlights of a label and folded into one integer,
each value taking a "digit" of base BASE (100):

    BASE^4 * case_sensitive          exact-case chars in the highlights
    BASE^3 * case_insensitive        same letter, other case
    BASE^2 * (BASE - first_match)    earlier first highlight is better
    BASE^1 * (BASE - range_count)    fewer fragments is better
    BASE^0 * (BASE - not_matching)   fewer unmatched chars is better

Values further left always dominate as long as every value stays below BASE.
Only the first BASE chars of a label are looked at, so long labels and
labels with BASE or more highlight ranges are scored in a degraded way
(cap-and-truncate). ScoreFactors.degraded flags these.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Sequence

from .filters import Highlight, index_of_ignore_case

logger = logging.getLogger(__name__)

BASE = 100


class ScoreFactors(NamedTuple):
    case_sensitive: int
    case_insensitive: int
    first_match_start: int
    range_count: int
    not_matching: int
    degraded: bool = False


def score_factors(label: str,
                  highlights: Optional[Sequence[Highlight]],
                  word: str,
                  word_lower: Optional[str] = None,
                  base: int = BASE) -> Optional[ScoreFactors]:
    """
    Walk the label (up to `base` chars) and collect the five score values.
    Returns None when there is nothing highlighted.

    Each highlighted part of the label is located in the word case-insensitively,
    never before the end of the previous part, then compared char by char.
    A part that can't be located counts neither as exact nor as wrong-case match.
    """
    if not highlights:
        return None
    if word_lower is None:
        word_lower = word.lower()

    length = min(base, len(label))
    case_sensitive = 0
    case_insensitive = 0
    first_match_start = 0
    not_matching = 0
    word_offset = 0
    pos = 0

    for idx, hl in enumerate(highlights):
        if idx == 0:
            first_match_start = min(hl.start, length)
        if pos >= length:
            break

        # chars between the previous highlight and this one
        gap_end = min(hl.start, length)
        if gap_end > pos:
            not_matching += gap_end - pos
            pos = gap_end
        if hl.start >= length:
            break

        part = label[hl.start:hl.end]
        found = index_of_ignore_case(word, part, word_offset, word_lower)
        stop = min(hl.end, length)
        if found >= 0:
            for k in range(hl.start, stop):
                wi = found + k - hl.start
                if wi < len(word) and label[k] == word[wi]:
                    case_sensitive += 1
                else:
                    case_insensitive += 1
            word_offset = found + len(part)
        pos = max(pos, stop)

    not_matching += max(0, length - pos)

    degraded = (len(label) > base
                or len(highlights) >= base
                or case_insensitive >= base)
    return ScoreFactors(
        case_sensitive,
        case_insensitive,
        first_match_start,
        len(highlights),
        not_matching,
        degraded,
    )


def combine(factors: ScoreFactors, base: int = BASE) -> int:
    """Fold the five values into one integer, see module docstring."""
    return ((base ** 4) * factors.case_sensitive
            + (base ** 3) * factors.case_insensitive
            + (base ** 2) * (base - factors.first_match_start)
            + (base ** 1) * max(0, base - factors.range_count)
            + (base ** 0) * (base - factors.not_matching))


def score_by_highlight(label: str,
                       highlights: Optional[Sequence[Highlight]],
                       word: str,
                       word_lower: Optional[str] = None,
                       base: int = BASE) -> int:
    """Score of a label against the typed word, 0 when nothing is highlighted."""
    factors = score_factors(label, highlights, word, word_lower, base)
    if factors is None:
        return 0
    if factors.degraded:
        logger.debug("degraded score for %r (len=%d, ranges=%d, base=%d)",
                     label[:20], len(label), factors.range_count, base)
    return combine(factors, base)
