# activity_eda/analysis/steps/feature_prune_step.py
from __future__ import annotations

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.analysis.engines.feature_prune_engine import FeaturePruneEngine
from activity_eda.pipeline.step import PipelineStep


class FeaturePruneStep(PipelineStep):
    """
    Contract:
    - consumes ctx.raw (FULL dataset, before partitioning)
    - produces ctx.prune / ctx.dataset
    """

    def __init__(self, engine: FeaturePruneEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        if ctx.raw is None:
            raise RuntimeError(f"[{self.step_name}] no dataset loaded")

        with self.inst.timer("prune_columns"):
            result = self.engine.prune(ctx.raw)

        ctx.prune = result
        ctx.dataset = result.dataset

        self.inst.metrics.record("columns_kept", len(result.dataset.feature_columns))
        logs.info(
            f"[{self.step_name}] near_zero_variance={len(result.near_zero_variance)} "
            f"high_missing={len(result.high_missing)} "
            f"identifiers={len(result.identifiers)} "
            f"kept={len(result.dataset.feature_columns)}"
        )
        return ctx
