# metrics_tracker.py - running averages for timings (query latency etc)

import json
import logging
import os
from collections import defaultdict
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class Metrics:
    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.m: Dict[str, float] = defaultdict(float)
        self.n: Dict[str, int] = defaultdict(int)
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                d = json.load(f)
            sums = {k: float(v["sum"]) for k, v in d.items()}
            counts = {k: int(v["count"]) for k, v in d.items()}
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("metrics %s unreadable, starting empty: %s", self.path, e)
            return
        self.m.update(sums)
        self.n.update(counts)

    def save(self):
        if not self.path:
            return
        d = {k: {"sum": self.m[k], "count": self.n[k]} for k in self.m}
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key: str, val: float):
        self.m[key] += val
        self.n[key] += 1

    def count(self, key: str) -> int:
        return self.n.get(key, 0)

    def avg(self, key: str) -> float:
        if not self.n.get(key):
            return 0.0
        return self.m[key] / self.n[key]

    def summary(self) -> Dict[str, Dict[str, float]]:
        return {k: {"count": self.n[k], "avg": self.avg(k)} for k in sorted(self.m)}
