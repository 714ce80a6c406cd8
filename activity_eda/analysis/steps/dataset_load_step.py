# activity_eda/analysis/steps/dataset_load_step.py
from __future__ import annotations

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.analysis.engines.dataset_load_engine import DatasetLoadEngine
from activity_eda.pipeline.step import PipelineStep


class DatasetLoadStep(PipelineStep):
    """
    Contract:
    - consumes ctx.data_path
    - produces ctx.raw
    """

    def __init__(self, engine: DatasetLoadEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        with self.inst.timer("load_csv"):
            ds = self.engine.load(ctx.data_path)

        ctx.raw = ds

        self.inst.metrics.record("rows", ds.n_rows)
        self.inst.metrics.record("columns_raw", len(ds.columns))
        logs.info(
            f"[{self.step_name}] loaded {ds.n_rows} rows x {len(ds.columns)} cols "
            f"from {ctx.data_path} labels={ds.label_domain}"
        )
        return ctx
