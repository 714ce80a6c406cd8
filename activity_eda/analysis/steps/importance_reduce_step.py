# activity_eda/analysis/steps/importance_reduce_step.py
from __future__ import annotations

from typing import Literal

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.analysis.engines.importance_engine import ImportanceEngine
from activity_eda.pipeline.step import PipelineStep


class ImportanceReduceStep(PipelineStep):
    """
    Contract:
    - consumes ctx.results[source] (+ ctx.train_set for permutation)
    - produces ctx.importance / ctx.reduced_formula
    """

    def __init__(
            self,
            *,
            engine: ImportanceEngine,
            source: str,
            threshold: float = 33.0,
            mode: Literal["keep", "drop"] = "keep",
            inst=None,
    ):
        super().__init__(inst)
        self.engine = engine
        self.source = source
        self.threshold = threshold
        self.mode = mode

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        result = ctx.results.get(self.source)
        if result is None:
            raise RuntimeError(f"[{self.step_name}] source model {self.source!r} not trained")

        with self.inst.timer(f"importance[{self.source}]"):
            ranking = self.engine.rank(result=result, dataset=ctx.train_set)
            formula = self.engine.reduced_formula(
                ranking=ranking,
                result=result,
                threshold=self.threshold,
                mode=self.mode,
            )

        ctx.importance = ranking
        ctx.reduced_formula = formula

        logs.info(
            f"[{self.step_name}] source={self.source} "
            f"above({self.threshold})={ranking.above(self.threshold)} "
            f"mode={self.mode} formula={formula.describe(ctx.dataset.label_column)}"
        )
        return ctx
