# activity_eda/analysis/pipeline.py
from __future__ import annotations

from pathlib import Path
from typing import List

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.observability.instrumentation import Instrumentation
from activity_eda.pipeline.step import PipelineStep
from activity_eda.utils.filesystem import FileSystem
from activity_eda.utils.path import PathManager


class AnalysisPipeline:
    """
    AnalysisPipeline

    Semantics:
    - Pipeline owns step order and the staging directory
    - Steps execute semantics
    - Output is committed all-or-nothing:
        success → staging renamed to <output>/<run_id>
        failure → staging removed, error propagates
    """

    def __init__(
            self,
            *,
            steps: List[PipelineStep],
            pm: PathManager,
            inst: Instrumentation,
            cfg,
            output_dir: Path | str | None = None,
    ):
        self.steps = steps
        self.pm = pm
        self.inst = inst
        self.cfg = cfg
        self.output_dir = output_dir

    def run(self, run_id: str, data_path: Path | str) -> AnalysisContext:
        logs.info(f"[AnalysisPipeline] START run_id={run_id} data={data_path}")

        staging = self.pm.staging_dir(run_id, self.output_dir)
        target = self.pm.run_dir(run_id, self.output_dir)

        FileSystem.remove(staging)
        FileSystem.ensure_dir(staging)

        ctx = AnalysisContext(
            run_id=run_id,
            cfg=self.cfg,
            inst=self.inst,
            data_path=Path(data_path),
            staging_dir=staging,
        )

        total = len(self.steps)
        self.inst.progress.start("analysis", total, "steps")

        try:
            for i, step in enumerate(self.steps, start=1):
                with step.timed():
                    ctx = step.run(ctx)
                ctx.metrics.update(self.inst.metrics.metrics)
                self.inst.progress.update("analysis", i, total, step.step_name)
        except Exception:
            logs.exception(f"[AnalysisPipeline] ABORT run_id={run_id}, discarding {staging}")
            FileSystem.remove(staging)
            FileSystem.remove_if_empty(staging.parent)
            raise

        ctx.output_dir = FileSystem.commit_dir(staging, target)
        FileSystem.remove_if_empty(staging.parent)
        ctx.staging_dir = ctx.output_dir

        self.inst.progress.done("analysis")
        self.inst.generate_timeline_report(run_id)
        logs.info(f"[AnalysisPipeline] DONE output={ctx.output_dir}")
        return ctx
