#!filepath: activity_eda/observability/metrics.py
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from activity_eda import logs

# "<metric>[<model run>]"
_RUN_KEY = re.compile(r"^(?P<metric>[^\[]+)\[(?P<run>[^\]]+)\]$")


@dataclass
class MetricRecorder:
    """
    Run-scoped scalar metrics.

    Dataset-level metrics use a bare name (rows, columns_kept);
    model-level metrics are keyed per model run: cv_accuracy[forest].
    """

    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any, *, run: Optional[str] = None):
        if not self.enabled:
            return
        key = f"{name}[{run}]" if run is not None else name
        self.metrics[key] = value
        logs.info(f"[Metric] {key} = {value}")

    def per_run(self, name: str) -> Dict[str, Any]:
        """{model run: value} of one model-level metric, in record order."""
        out = {}
        for key, value in self.metrics.items():
            m = _RUN_KEY.match(key)
            if m and m.group("metric") == name:
                out[m.group("run")] = value
        return out
