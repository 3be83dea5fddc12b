# config_manager.py - JSON config manager

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "default_k": 5,
    "seed_default_corpus": True,
    "show_timing": False,
    "log_path": os.path.join("logs", "autocomplete.log"),
}


class Config:
    """
    Settings with defaults, optionally backed by a JSON file.
    path=None keeps everything in memory (nothing is written).
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("config %s unreadable, using defaults: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("config %s is not a JSON object, using defaults", self.path)
            return
        for k, v in loaded.items():
            if k not in self.data:
                logger.warning("ignoring unknown config key %r", k)
                continue
            try:
                self.data[k] = self._coerce(k, v)
            except (TypeError, ValueError) as e:
                logger.warning("bad value for %r, keeping default: %s", k, e)

    def save(self):
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str) -> Any:
        return self.data[key]

    def set(self, key: str, val: Any) -> Any:
        if key not in self.data:
            raise KeyError(f"no such option: {key}")
        self.data[key] = self._coerce(key, val)
        self.save()
        return self.data[key]

    def _coerce(self, key: str, val: Any) -> Any:
        kind = type(DEFAULTS[key])
        if kind is bool and isinstance(val, str):
            return val.strip().lower() in ("1", "true", "yes", "on")
        val = kind(val)
        if key == "default_k" and val < 0:
            raise ValueError(f"default_k must be >= 0, got {val}")
        return val

    def items(self):
        return self.data.items()
