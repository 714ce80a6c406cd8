# activity_eda/analysis/steps/model_evaluate_step.py
from __future__ import annotations

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.analysis.engines.evaluate_engine import EvaluateEngine
from activity_eda.pipeline.step import PipelineStep


class ModelEvaluateStep(PipelineStep):
    """
    Held-out evaluation of ONE model run.

    Contract:
    - consumes ctx.results[name] / ctx.test_set
    - produces ctx.evaluations[name]
    - does NOT modify the model
    """

    def __init__(self, *, name: str, engine: EvaluateEngine, inst=None):
        super().__init__(inst)
        self.name = name
        self.engine = engine

    @property
    def step_name(self) -> str:
        return f"{self.__class__.__name__}[{self.name}]"

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        result = ctx.results.get(self.name)
        if result is None:
            raise RuntimeError(f"[{self.step_name}] model {self.name!r} not trained")
        if ctx.test_set is None:
            raise RuntimeError(f"[{self.step_name}] no test partition")

        with self.inst.timer(f"evaluate[{self.name}]"):
            evaluation = self.engine.evaluate(result=result, dataset=ctx.test_set)

        ctx.evaluations[self.name] = evaluation

        cm = evaluation.confusion
        lo, hi = cm.accuracy_ci()
        self.inst.metrics.record("test_accuracy", round(cm.accuracy, 6), run=self.name)
        logs.info(
            f"[{self.step_name}] accuracy={cm.accuracy:.4f} "
            f"ci95=({lo:.4f}, {hi:.4f}) kappa={cm.kappa:.4f} n={cm.total}"
        )
        return ctx
