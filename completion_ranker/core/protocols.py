# completion_ranker/core/protocols.py
"""
Protocol interfaces for the collaborators of the CompletionModel.

The model never talks to completion providers directly, it only sees what they
left behind on each item: the provider ("support"), the result batch it came in
("container") and optionally a matcher the provider wants used for its items.
These Protocols describe exactly that surface so callers can hand in their own
objects (tests use the small dataclasses in completion_model.py).
Keep this file stable.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable
from typing_extensions import TypedDict

from .filters import Matcher


# Typed structures used across components ------------------------------------

class CompletionStats(TypedDict, total=False):
    """
    Aggregate counters of one recompute pass.

    Example:
      {"total": 3, "suggestionCount": 3, "snippetCount": 1, "textCount": 2}

    total is the number of items that passed filtering, suggestionCount
    carries the same value under its older name.
    total=False keeps it open for callers that want to add their own counters.
    """
    total: int
    suggestionCount: int
    snippetCount: int
    textCount: int


# cmp-style total order over two items (negative / zero / positive)
CompareFn = Callable[[Any, Any], int]


# Protocols ------------------------------------------------------------------

@runtime_checkable
class SupportProtocol(Protocol):
    """
    A completion provider. Only identity and an optional `filter` are used.
    `filter` may be None, the default fuzzy matcher is used then.
    """

    filter: Optional[Matcher]


@runtime_checkable
class ContainerProtocol(Protocol):
    """A result batch, incomplete=True means the provider wants to be asked again."""

    incomplete: bool
