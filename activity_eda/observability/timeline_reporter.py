#!filepath: activity_eda/observability/timeline_reporter.py
import re
from collections import OrderedDict
from typing import Dict, List, Tuple

from activity_eda import logs

# leaf names tagged with a model run: fit[forest], evaluate[forest]
_RUN_TAG = re.compile(r"\[(?P<run>[^\]]+)\]$")


class TimelineReporter:
    """
    Analysis timeline: leaf timings with their share of the run,
    then wall time per model run (fit + evaluate + importance).
    """

    def __init__(self, timeline: Dict[str, float], run_id: str):
        self.timeline = timeline
        self.run_id = run_id

    @property
    def total(self) -> float:
        return float(sum(self.timeline.values()))

    def rows(self) -> List[Tuple[str, float, float]]:
        """(leaf, seconds, percent of total) in execution order."""
        total = self.total
        return [
            (str(name), sec, sec / total * 100 if total else 0.0)
            for name, sec in self.timeline.items()
        ]

    def by_model_run(self) -> Dict[str, float]:
        out: Dict[str, float] = OrderedDict()
        for name, sec in self.timeline.items():
            m = _RUN_TAG.search(str(name))
            if m:
                run = m.group("run")
                out[run] = out.get(run, 0.0) + sec
        return out

    def print(self):
        logs.info(f"[Timeline] ===== Analysis timeline for {self.run_id} =====")
        for name, sec, share in self.rows():
            logs.info(f"[Timeline] {name:<30} {sec:>8.3f}s {share:>5.1f}%")

        for run, sec in self.by_model_run().items():
            logs.info(f"[Timeline] model {run:<24} {sec:>8.3f}s")

        logs.info(f"[Timeline] Total{'':<27} {self.total:>8.3f}s")
