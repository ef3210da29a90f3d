# logger_utils.py - logging helpers and block timing

import logging
import time
from typing import Optional

from rich.logging import RichHandler

from completion_ranker.utils.metrics_tracker import Metrics

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """
    Route the package loggers through rich. Only the CLI calls this,
    the library itself never touches handlers.
    """
    root = logging.getLogger("completion_ranker")
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(show_path=False, markup=False))
    for h in root.handlers:
        h.setFormatter(logging.Formatter(LOG_FORMAT))


class Log:
    """Small facade over logging for timing code blocks."""

    @staticmethod
    def time_block(label: str,
                   logger: Optional[logging.Logger] = None,
                   metrics: Optional[Metrics] = None):
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("recompute", logger, metrics):
                do_some_work()
        The duration (seconds) is logged at DEBUG and recorded in `metrics` under `label`.
        """
        return _Timer(label, logger or logging.getLogger("completion_ranker"), metrics)


class _Timer:
    """Context manager used internally to measure time for a code block."""

    def __init__(self, label: str, logger: logging.Logger, metrics: Optional[Metrics]):
        self.label = label
        self.logger = logger
        self.metrics = metrics
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        if exc_type is None:
            if self.metrics is not None:
                self.metrics.record(self.label, self.elapsed)
            self.logger.debug("%s done in %.3fms", self.label, self.elapsed * 1000.0)
        return False
