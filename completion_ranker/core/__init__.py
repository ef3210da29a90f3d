"""
completion_ranker.core

The ranking engine behind interactive code completion.
Contains:
 - the lazily recomputed, filtered and scored item list (CompletionModel)
 - highlight based scoring (score_by_highlight, ScoreFactors)
 - default fuzzy matchers (fuzzy_contiguous_filter and friends)
 - Protocols for the provider/batch objects the model reads
"""

from .completion_model import (
    CompletionItem,
    CompletionModel,
    LineContext,
    RankedView,
    SuggestContainer,
    SuggestSupport,
    compare_by_sort_text,
)
from .filters import (
    Highlight,
    fuzzy_contiguous_filter,
    matches_camel_case,
    matches_contiguous_substring,
    matches_prefix,
    or_filters,
)
from .protocols import CompletionStats
from .scoring import BASE, ScoreFactors, score_by_highlight

__all__ = [
    "CompletionItem",
    "CompletionModel",
    "LineContext",
    "RankedView",
    "SuggestContainer",
    "SuggestSupport",
    "compare_by_sort_text",
    "Highlight",
    "fuzzy_contiguous_filter",
    "matches_camel_case",
    "matches_contiguous_substring",
    "matches_prefix",
    "or_filters",
    "CompletionStats",
    "BASE",
    "ScoreFactors",
    "score_by_highlight",
]
