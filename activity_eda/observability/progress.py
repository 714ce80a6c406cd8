#!filepath: activity_eda/observability/progress.py
from time import perf_counter
from typing import Dict

from activity_eda import logs


class ProgressReporter:
    """
    Step-level progress of one analysis run: current / total, elapsed, ETA.

    ETA = mean cost of the finished steps x remaining steps.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._started: Dict[str, float] = {}

    def start(self, task: str, total: int, unit: str = ""):
        if not self.enabled:
            return
        self._started[task] = perf_counter()
        logs.info(f"[Progress] {task} started total={total} {unit}".rstrip())

    def elapsed(self, task: str) -> float:
        started = self._started.get(task)
        return perf_counter() - started if started is not None else 0.0

    def update(self, task: str, current: int, total: int, detail: str = ""):
        if not self.enabled:
            return
        elapsed = self.elapsed(task)
        eta = elapsed / current * (total - current) if current else 0.0
        logs.info(
            f"[Progress] {task}: {current}/{total} {detail} "
            f"| elapsed={elapsed:.2f}s | eta={eta:.2f}s"
        )

    def done(self, task: str):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} done in {self.elapsed(task):.2f}s")
        self._started.pop(task, None)
