# completion_ranker - incremental filtering and ranking of completion items

from completion_ranker.core import (
    CompletionItem,
    CompletionModel,
    LineContext,
    SuggestContainer,
    SuggestSupport,
)

__all__ = [
    "CompletionItem",
    "CompletionModel",
    "LineContext",
    "SuggestContainer",
    "SuggestSupport",
]

__version__ = "0.1.0"
