#!filepath: activity_eda/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from activity_eda.observability.metrics import MetricRecorder
from activity_eda.observability.progress import ProgressReporter
from activity_eda.observability.timeline_reporter import TimelineReporter
from activity_eda.observability.timer import Timer


@dataclass
class Instrumentation:
    """
    Instrumentation（Leaf-only accounting + Parent scope）

    规则：
    1. Timeline 只记录叶子节点（record=True），同名叶子累加
    2. Step 级 timer 仅作为时间边界（record=False）
    3. record=False 的 timer 不产生任何副作用
    """

    enabled: bool = True

    def __post_init__(self):
        self.progress = ProgressReporter(enabled=self.enabled)
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        Parameters
        ----------
        name : str
            计时名称
        record : bool
            - True  : 叶子节点，记录到 timeline
            - False : 父级 scope，仅定义 wall-time
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                inst._timer.end(name)
                if record:
                    inst.timeline[name] = inst._timer.total(name)

        return _ctx()

    def generate_timeline_report(self, run_id: str):
        TimelineReporter(self.timeline, run_id).print()


class NoOpInstrumentation:
    """Instrumentation disabled 时使用。"""

    def __init__(self):
        self.progress = ProgressReporter(enabled=False)
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def generate_timeline_report(self, run_id: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
