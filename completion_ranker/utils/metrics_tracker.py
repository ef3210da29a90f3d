# metrics_tracker.py - in-memory sums/counts per key, nothing is persisted

from collections import defaultdict
from typing import Dict


class Metrics:
    def __init__(self):
        self.m = defaultdict(float)
        self.n = defaultdict(int)

    def record(self, key: str, val: float) -> None:
        self.m[key] += val
        self.n[key] += 1

    def count(self, key: str) -> int:
        return self.n.get(key, 0)

    def avg(self, key: str) -> float:
        if not self.n.get(key):
            return 0.0
        return self.m[key] / self.n[key]

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        return {k: {"sum": self.m[k], "count": self.n[k], "avg": self.avg(k)} for k in self.n}

    def reset(self) -> None:
        self.m.clear()
        self.n.clear()
