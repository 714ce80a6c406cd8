#!filepath: activity_eda/observability/timer.py
import time
from collections import defaultdict
from typing import Dict, List


class Timer:
    """
    Lap timer keyed by name.

    The same name may be timed more than once (one fit per grid run,
    a rerun of the same model); every end() appends a lap.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._running: Dict[str, float] = {}
        self.laps: Dict[str, List[float]] = defaultdict(list)

    def start(self, name: str):
        if self.enabled:
            self._running[name] = time.perf_counter()

    def end(self, name: str) -> float:
        """Elapsed seconds of the current lap; 0.0 if `name` was never started."""
        if not self.enabled or name not in self._running:
            return 0.0
        elapsed = time.perf_counter() - self._running.pop(name)
        self.laps[name].append(elapsed)
        return elapsed

    def total(self, name: str) -> float:
        return float(sum(self.laps.get(name, ())))
