# config_manager.py - JSON config for the ranking model

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "score_base": 100,        # digit base of the score, see core/scoring.py
    "record_metrics": True,   # time every recompute into Metrics
}


class Config:
    def __init__(self, path: Optional[str] = None, **overrides: Any):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        if path:
            self._load()
        for k, v in overrides.items():
            self.set(k, v)

    def _load(self) -> None:
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("config %s not readable, using defaults: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("config %s is not a JSON object, using defaults", self.path)
            return
        for k, v in loaded.items():
            if k in self.data:
                self.set(k, v)
            else:
                logger.warning("config %s: unknown option %r ignored", self.path, k)

    def save(self, path: Optional[str] = None) -> None:
        path = path or self.path
        if not path:
            raise ValueError("no config path to save to")
        with open(path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str) -> Any:
        return self.data[key]

    def set(self, key: str, val: Any) -> None:
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        kind = type(DEFAULTS[key])
        if kind is bool and isinstance(val, str):
            val = val.strip().lower() in ("1", "true", "yes", "on")
        if kind is int and isinstance(val, float) and not val.is_integer():
            raise ValueError(f"{key} must be a whole number, got {val}")
        self.data[key] = kind(val)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.data)
