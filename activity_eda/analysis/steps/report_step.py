# activity_eda/analysis/steps/report_step.py
from __future__ import annotations

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.analysis.engines.report_engine import ReportEngine
from activity_eda.pipeline.step import PipelineStep


class ReportStep(PipelineStep):
    """
    ReportStep

    Outputs (under ctx.staging_dir):
    - feature_stats.csv / exclusions.json
    - partition_summary.csv
    - summary.csv
    - importance.csv / importance.png
    - confusion_<run>.csv / confusion_<run>.png / per_class_<run>.csv

    Contract:
    - read-only on every ctx value
    """

    def __init__(
            self,
            *,
            engine: ReportEngine,
            top_n: int = 20,
            threshold: float | None = None,
            inst=None,
    ):
        super().__init__(inst)
        self.engine = engine
        self.top_n = top_n
        self.threshold = threshold

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        out = ctx.staging_dir
        written = []

        with self.inst.timer("report_tables"):
            if ctx.prune is not None:
                written.append(self.engine.write_csv(ctx.prune.stats, out / "feature_stats.csv"))
                written.append(self.engine.write_json(ctx.prune.exclusion_sets(), out / "exclusions.json"))

            if ctx.partition is not None and ctx.dataset is not None:
                written.append(
                    self.engine.write_csv(
                        ctx.partition.summary(ctx.dataset), out / "partition_summary.csv"
                    )
                )

            label = ctx.dataset.label_column if ctx.dataset is not None else "classe"
            summary = self.engine.summary_table(ctx.results, ctx.evaluations, label)
            if not summary.empty:
                written.append(self.engine.write_csv(summary, out / "summary.csv"))

            if ctx.importance is not None:
                written.append(self.engine.write_csv(ctx.importance.to_frame(), out / "importance.csv"))

            for name, evaluation in ctx.evaluations.items():
                cm = evaluation.confusion
                written.append(self.engine.write_csv(cm.to_frame(), out / f"confusion_{name}.csv"))
                written.append(self.engine.write_csv(cm.per_class(), out / f"per_class_{name}.csv"))

        with self.inst.timer("report_figures"):
            for name, evaluation in ctx.evaluations.items():
                written.append(
                    self.engine.plot_confusion(
                        evaluation.confusion, out / f"confusion_{name}.png", title=name
                    )
                )

            if ctx.importance is not None:
                written.append(
                    self.engine.plot_importance(
                        ctx.importance,
                        out / "importance.png",
                        top_n=self.top_n,
                        threshold=self.threshold,
                    )
                )

        for path in written:
            logs.info(f"[{self.step_name}] saved {path.name}")
        return ctx
