# completion_ranker/core/completion_model.py
"""
CompletionModel - filtered and scored view over one completion session

The model is built once per session with the items the providers returned, the
anchor column and what has been typed so far (LineContext). As the user keeps
typing, the caller swaps the LineContext and reads `items`, `top_score_idx`,
`incomplete` and `stats`; the first read after a change recomputes everything
in one pass:

    items/context -> filter (matcher per item) -> score (scoring.py) -> RankedView

Notes:
 - the cached view is either a RankedView or INVALID, every mutation sets INVALID
   and nothing is recomputed until somebody reads again.
 - `items` keeps insertion order, not score order; `top_score_idx` points at the
   best item (first one wins on equal scores).
 - providers that flagged their batch as incomplete show up in `incomplete`,
   their fresh results are merged back with replace_incomplete().
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from completion_ranker.utils.config_manager import Config
from completion_ranker.utils.logger_utils import Log
from completion_ranker.utils.metrics_tracker import Metrics

from .filters import Highlights, Matcher, fuzzy_contiguous_filter
from .protocols import CompareFn, CompletionStats, ContainerProtocol, SupportProtocol
from .scoring import ScoreFactors, score_by_highlight, score_factors

logger = logging.getLogger(__name__)

# leading/trailing non-word chars, used when only the filter text matched
_TRIM_RE = re.compile(r"^\W+|\W+$")


# Types
@dataclass(frozen=True)
class LineContext:
    """What has been typed: the line up to the cursor and the edit delta since the request."""
    leading_line_content: str = ""
    character_count_delta: int = 0


@dataclass(eq=False)
class SuggestSupport:
    """Minimal provider object. Compared by identity."""
    name: str = "support"
    filter: Optional[Matcher] = None


@dataclass(eq=False)
class SuggestContainer:
    """One result batch of a provider."""
    incomplete: bool = False


@dataclass(eq=False)
class CompletionItem:
    """
    One suggestion plus where it came from.

    column: cursor column the provider computed the item for
    overwrite_before: number of chars before the cursor the insert replaces
    type: "snippet", "text" or anything else (only the first two are counted)
    matcher: resolved once here - explicit, else support.filter, else the default
    highlights: set by the model on every recompute, not part of the item's identity
    """
    label: str
    support: Optional[SupportProtocol] = None
    container: Optional[ContainerProtocol] = None
    column: int = 1
    overwrite_before: int = 0
    filter_text: Optional[str] = None
    type: str = ""
    sort_text: Optional[str] = None
    matcher: Optional[Matcher] = None
    highlights: Optional[Highlights] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.matcher is None:
            self.matcher = getattr(self.support, "filter", None) or fuzzy_contiguous_filter


@dataclass(frozen=True)
class RankedView:
    """Result of one recompute pass."""
    items: Tuple[CompletionItem, ...]
    top_score_idx: int
    incomplete: Tuple[SupportProtocol, ...]
    stats: CompletionStats


class _Invalid:
    __slots__ = ()

    def __repr__(self) -> str:
        return "INVALID"


# marker for "view must be rebuilt on next read"
INVALID = _Invalid()


def compare_by_sort_text(a: CompletionItem, b: CompletionItem) -> int:
    """Default merge order: sort text (label when missing), then label."""
    ka = (a.sort_text or a.label, a.label)
    kb = (b.sort_text or b.label, b.label)
    return (ka > kb) - (ka < kb)


def _tail(text: str, n: int) -> str:
    """Last n chars of text, n clamped to [0, len(text)]."""
    n = max(0, min(n, len(text)))
    return text[len(text) - n:]


class CompletionModel:
    """
    Lazily filtered and scored list of completion items.

    Public API:
      - line_context (get/set)
      - items, top_score_idx, incomplete, stats, view (read, recompute on demand)
      - all_items (the unfiltered candidate set)
      - replace_incomplete(new_items, compare)
      - explain(index) -> ScoreFactors
    """

    def __init__(self,
                 items: Iterable[CompletionItem],
                 column: int,
                 line_context: LineContext,
                 *,
                 config: Optional[Config] = None,
                 metrics: Optional[Metrics] = None):
        self._items: List[CompletionItem] = list(items)
        self._column = column
        self._line_context = line_context

        cfg = config or Config()
        self._base: int = cfg.get("score_base")
        if self._base < 2:
            raise ValueError(f"score_base must be >= 2, got {self._base}")
        self._record_metrics: bool = cfg.get("record_metrics")
        self.metrics = metrics if metrics is not None else Metrics()

        self._state: Union[RankedView, _Invalid] = INVALID

    # Context ----------------------------------------------------------------
    @property
    def line_context(self) -> LineContext:
        return self._line_context

    @line_context.setter
    def line_context(self, value: LineContext) -> None:
        if (self._line_context.leading_line_content == value.leading_line_content
                and self._line_context.character_count_delta == value.character_count_delta):
            return
        self._line_context = value
        self._state = INVALID

    # Cached view ---------------------------------------------------------------
    @property
    def view(self) -> RankedView:
        state = self._state
        if isinstance(state, RankedView):
            return state
        if self._record_metrics:
            with Log.time_block("recompute", logger, self.metrics):
                state = self._create_view()
        else:
            state = self._create_view()
        self._state = state
        return state

    @property
    def items(self) -> Tuple[CompletionItem, ...]:
        return self.view.items

    @property
    def top_score_idx(self) -> int:
        return self.view.top_score_idx

    @property
    def incomplete(self) -> Tuple[SupportProtocol, ...]:
        return self.view.incomplete

    @property
    def stats(self) -> CompletionStats:
        return self.view.stats

    @property
    def all_items(self) -> Tuple[CompletionItem, ...]:
        return tuple(self._items)

    # Merging incomplete results ----------------------------------------------------
    def replace_incomplete(self,
                           new_items: Sequence[CompletionItem],
                           compare: Optional[CompareFn] = None) -> None:
        """
        Merge the fresh results of the providers listed in `incomplete`.

        Items of those providers are overwritten in place by new items, in order;
        once the new items run out the remaining old ones are dropped, and new items
        left over are appended. Overwriting in place keeps the list from jumping
        around when a provider returns about as many items as before.
        The whole set is then sorted with `compare` (stable) and the view reset.
        """
        incomplete = self.incomplete
        new_items = list(new_items)
        new_idx = 0

        i = 0
        while i < len(self._items):
            if self._items[i].support in incomplete:
                if new_idx < len(new_items):
                    self._items[i] = new_items[new_idx]
                    new_idx += 1
                else:
                    del self._items[i]
                    continue
            i += 1

        if new_idx < len(new_items):
            self._items.extend(new_items[new_idx:])

        self._items.sort(key=cmp_to_key(compare or compare_by_sort_text))
        self._state = INVALID
        logger.debug("merged %d new items from %d incomplete supports, %d items now",
                     len(new_items), len(incomplete), len(self._items))

    # Diagnostics --------------------------------------------------------------------
    def explain(self, index: int) -> Optional[ScoreFactors]:
        """Score factors of the filtered item at `index`, None when it has no highlights."""
        item = self.items[index]
        word = self._word_for(item)
        return score_factors(item.label, item.highlights, word, word.lower(), self._base)

    # internals -------------------------------------------------------------------------
    def _word_len(self, item: CompletionItem) -> int:
        # candidates of different providers may be anchored at different columns
        return (item.overwrite_before
                + self._line_context.character_count_delta
                - (item.column - self._column))

    def _word_for(self, item: CompletionItem) -> str:
        return _tail(self._line_context.leading_line_content, self._word_len(item))

    def _create_view(self) -> RankedView:
        leading = self._line_context.leading_line_content
        filtered: List[CompletionItem] = []
        incomplete: List[SupportProtocol] = []
        stats: CompletionStats = {
            "total": 0, "suggestionCount": 0, "snippetCount": 0, "textCount": 0,
        }
        top_score_idx = -1
        top_score = -1

        # most items share the same word, only slice when the length changes
        word = ""
        word_lower = ""
        last_len: Optional[int] = None

        for item in self._items:
            word_len = self._word_len(item)
            if word_len != last_len:
                last_len = word_len
                word = _tail(leading, word_len)
                word_lower = word.lower()

            matcher = item.matcher

            # highlights are always computed against the label
            item.highlights = matcher(word, item.label)
            matched = item.highlights is not None

            # no match on the label -> try the filter text, highlight the label
            # with the word stripped of surrounding non-word chars
            if (not matched
                    and item.filter_text is not None
                    and item.filter_text != item.label):
                if matcher(word, item.filter_text):
                    matched = True
                    item.highlights = matcher(_TRIM_RE.sub("", word), item.label)

            if not matched:
                continue

            filtered.append(item)

            score = score_by_highlight(item.label, item.highlights, word, word_lower, self._base)
            if score > top_score:
                top_score = score
                top_score_idx = len(filtered) - 1

            container = item.container
            if (container is not None and container.incomplete
                    and item.support is not None and item.support not in incomplete):
                incomplete.append(item.support)

            stats["total"] += 1
            stats["suggestionCount"] = stats["total"]
            if item.type == "snippet":
                stats["snippetCount"] += 1
            elif item.type == "text":
                stats["textCount"] += 1

        logger.debug("filtered %d/%d items, top=%d, incomplete=%d",
                     len(filtered), len(self._items), top_score_idx, len(incomplete))
        return RankedView(tuple(filtered), top_score_idx, tuple(incomplete), stats)
