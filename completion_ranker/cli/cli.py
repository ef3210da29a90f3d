"""
cli.py - inspect how a list of completion items is filtered and ranked
Features:
- Loads items from a JSON file (one object per item)
- Builds a CompletionModel for the given typed text
- Prints the filtered items in a Rich table, top item marked, stats underneath
- Optional per-item score breakdown (--explain)

Usage:
  completion-ranker items.json --text "self.fo" [--column 8] [--delta 0] [--explain]

Item fields: label, filterText, type, overwriteBefore, column, provider, incomplete, sortText
overwriteBefore defaults to the number of word chars at the end of --text.
"""

import argparse
import json
import logging
import re
from typing import Any, Dict, List, Optional

# ui styling with Rich
from rich.console import Console
from rich.table import Table
from rich.markup import escape
from rich.text import Text
from rich import box

from completion_ranker.core.completion_model import (
    CompletionItem,
    CompletionModel,
    LineContext,
    SuggestContainer,
    SuggestSupport,
)
from completion_ranker.utils.config_manager import Config
from completion_ranker.utils.logger_utils import setup_logging

logger = logging.getLogger(__name__)

# items without overwriteBefore replace the word chars left of the cursor
_TRAILING_WORD_RE = re.compile(r"\w*$")


class InputError(Exception):
    """Items file missing or malformed."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="completion-ranker",
        description="Filter and rank completion items against typed text.",
    )
    parser.add_argument("items", help="JSON file with a list of items")
    parser.add_argument("--text", default="", help="line content up to the cursor")
    parser.add_argument("--column", type=int, default=None,
                        help="anchor column (default: end of --text, 1-based)")
    parser.add_argument("--delta", type=int, default=0, help="character count delta")
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--explain", action="store_true", help="show score factors")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser


def load_items(path: str, column: int, overwrite_before: int = 0) -> List[CompletionItem]:
    """
    Read items from `path`. Items naming the same provider share one
    SuggestSupport, and one container that is incomplete if any of them says so.
    `overwrite_before` is used for items that don't bring their own.
    """
    try:
        with open(path, "r", encoding="utf8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        raise InputError(f"cannot read {path}: {e}") from e
    if not isinstance(raw, list):
        raise InputError(f"{path}: expected a JSON list of items")

    supports: Dict[str, SuggestSupport] = {}
    containers: Dict[str, SuggestContainer] = {}
    items: List[CompletionItem] = []
    for n, entry in enumerate(raw):
        if not isinstance(entry, dict) or not isinstance(entry.get("label"), str):
            raise InputError(f"{path}: item {n} has no string 'label'")
        provider = str(entry.get("provider", "default"))
        if provider not in supports:
            supports[provider] = SuggestSupport(name=provider)
            containers[provider] = SuggestContainer()
        if entry.get("incomplete"):
            containers[provider].incomplete = True
        items.append(CompletionItem(
            label=entry["label"],
            support=supports[provider],
            container=containers[provider],
            column=int(entry.get("column", column)),
            overwrite_before=int(entry.get("overwriteBefore", overwrite_before)),
            filter_text=entry.get("filterText"),
            type=str(entry.get("type", "")),
            sort_text=entry.get("sortText"),
        ))
    return items


def _highlighted(item: CompletionItem) -> Text:
    text = Text(item.label)
    for hl in item.highlights or ():
        text.stylize("bold underline", hl.start, hl.end)
    return text


def render(model: CompletionModel, console: Console, explain: bool = False) -> None:
    """Print the filtered items in insertion order, top item marked with '*'."""
    table = Table(title="Completions", box=box.SIMPLE, show_edge=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("", justify="center", style="bold green")
    table.add_column("Label", style="bold")
    table.add_column("Type", style="dim")
    table.add_column("Provider", style="dim")
    if explain:
        for name in ("exact", "case", "first", "ranges", "unmatched"):
            table.add_column(name, justify="right", style="magenta")

    for i, item in enumerate(model.items):
        row: List[Any] = [
            str(i),
            "*" if i == model.top_score_idx else "",
            _highlighted(item),
            item.type,
            getattr(item.support, "name", ""),
        ]
        if explain:
            factors = model.explain(i)
            if factors is None:
                row.extend(["-"] * 5)
            else:
                row.extend(str(v) for v in factors[:5])
        table.add_row(*row)
    console.print(table)

    stats = model.stats
    console.print(
        f"[cyan]total[/cyan] {stats['total']}  "
        f"[cyan]snippets[/cyan] {stats['snippetCount']}  "
        f"[cyan]text[/cyan] {stats['textCount']}"
    )
    if model.incomplete:
        names = ", ".join(getattr(s, "name", repr(s)) for s in model.incomplete)
        console.print(f"[yellow]incomplete:[/yellow] {escape(names)}")


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    if args.verbose:
        setup_logging(logging.DEBUG)

    column = args.column if args.column is not None else len(args.text) + 1
    try:
        cfg = Config(args.config) if args.config else Config()
        word = _TRAILING_WORD_RE.search(args.text).group(0)
        items = load_items(args.items, column, len(word))
        model = CompletionModel(items, column, LineContext(args.text, args.delta), config=cfg)
    except (InputError, KeyError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 2

    render(model, console, explain=args.explain)
    logger.debug("recompute stats: %s", model.metrics.snapshot())
    return 0
