# activity_eda/analysis/steps/artifact_persist_step.py
from __future__ import annotations

import json
from datetime import datetime, timezone

import joblib

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.observability.timeline_reporter import TimelineReporter
from activity_eda.pipeline.step import PipelineStep
from activity_eda.utils.filesystem import FileSystem


class ArtifactPersistStep(PipelineStep):
    """
    ArtifactPersistStep

    Semantics:
    - Persist run-scoped fitted models (joblib) + run.json
    - Writes into staging only; the pipeline commits
    """

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        if not ctx.results:
            raise RuntimeError(f"[{self.step_name}] no fitted models to persist")

        model_dir = FileSystem.ensure_dir(ctx.staging_dir / "models")

        models = {}
        with self.inst.timer("persist_models"):
            for name, result in ctx.results.items():
                path = model_dir / f"{name}.joblib"
                joblib.dump(result.model, path)
                models[name] = {
                    "path": f"models/{path.name}",
                    "family": result.family,
                    "input_columns": list(result.input_columns),
                    "feature_names": list(result.feature_names),
                    "best_params": result.best_params,
                    "fold_scores": list(result.fold_scores),
                }

        evaluations = {
            name: {
                "accuracy": ev.confusion.accuracy,
                "kappa": ev.confusion.kappa,
                "n": ev.confusion.total,
            }
            for name, ev in ctx.evaluations.items()
        }

        meta = {
            "run_id": ctx.run_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "data_path": str(ctx.data_path),
            "config": ctx.cfg.model_dump() if hasattr(ctx.cfg, "model_dump") else None,
            "models": models,
            "evaluations": evaluations,
            "metrics": dict(ctx.metrics),
            "seconds_per_model": TimelineReporter(ctx.inst.timeline, ctx.run_id).by_model_run(),
            "cv_accuracy": ctx.inst.metrics.per_run("cv_accuracy"),
            "test_accuracy": ctx.inst.metrics.per_run("test_accuracy"),
        }

        meta_path = FileSystem.safe_write_text(
            ctx.staging_dir / "run.json",
            json.dumps(meta, indent=2, default=str),
        )
        logs.info(f"[{self.step_name}] saved {meta_path.name} + {len(models)} models")
        return ctx
