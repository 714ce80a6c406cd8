#!filepath: activity_eda/pipeline/step.py
from __future__ import annotations

from typing import Any

from activity_eda.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep:
    """
    Pipeline Step 基类

    职责（唯一）：
      1. 作为 orchestration 层（读 ctx → 调 engine → 写 ctx）
      2. 提供 Step 级时间语义边界（parent scope）

    规则：
      - Step 本身不进入 timeline
      - 所有 pandas / sklearn 逻辑属于 Engine
      - Step 行为不依赖 inst 是否存在
    """

    def __init__(self, inst: Instrumentation | None = None):
        # 永远保证 inst 可用（No-op 语义）
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """默认使用类名作为 Step 名称。"""
        return self.__class__.__name__

    def timed(self):
        """
        Step 级时间语义边界（record=False，不进入 timeline）
        """
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: Any) -> Any:
        raise NotImplementedError
