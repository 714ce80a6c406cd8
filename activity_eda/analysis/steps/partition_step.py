# activity_eda/analysis/steps/partition_step.py
from __future__ import annotations

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.analysis.engines.partition_engine import PartitionEngine
from activity_eda.pipeline.step import PipelineStep


class PartitionStep(PipelineStep):
    """
    Contract:
    - consumes ctx.dataset
    - produces ctx.partition / ctx.train_set / ctx.test_set
    """

    def __init__(self, engine: PartitionEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        if ctx.dataset is None:
            raise RuntimeError(f"[{self.step_name}] no pruned dataset")

        with self.inst.timer("stratified_split"):
            partition = self.engine.split(ctx.dataset)

        ctx.partition = partition
        ctx.train_set = ctx.dataset.take(partition.train)
        ctx.test_set = ctx.dataset.take(partition.test)

        self.inst.metrics.record("train_rows", len(partition.train))
        self.inst.metrics.record("test_rows", len(partition.test))
        logs.info(
            f"[{self.step_name}] train={len(partition.train)} "
            f"test={len(partition.test)} seed={partition.seed}"
        )
        return ctx
