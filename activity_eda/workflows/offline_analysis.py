# activity_eda/workflows/offline_analysis.py
from __future__ import annotations

from pathlib import Path

from activity_eda.analysis.engines.dataset_load_engine import DatasetLoadEngine
from activity_eda.analysis.engines.evaluate_engine import EvaluateEngine
from activity_eda.analysis.engines.feature_prune_engine import FeaturePruneEngine
from activity_eda.analysis.engines.importance_engine import ImportanceEngine
from activity_eda.analysis.engines.partition_engine import PartitionEngine
from activity_eda.analysis.engines.registry import resolve_model_train_engine
from activity_eda.analysis.engines.report_engine import ReportEngine
from activity_eda.analysis.pipeline import AnalysisPipeline
from activity_eda.analysis.steps.artifact_persist_step import ArtifactPersistStep
from activity_eda.analysis.steps.dataset_load_step import DatasetLoadStep
from activity_eda.analysis.steps.feature_prune_step import FeaturePruneStep
from activity_eda.analysis.steps.importance_reduce_step import ImportanceReduceStep
from activity_eda.analysis.steps.model_evaluate_step import ModelEvaluateStep
from activity_eda.analysis.steps.model_train_step import ModelTrainStep
from activity_eda.analysis.steps.partition_step import PartitionStep
from activity_eda.analysis.steps.report_step import ReportStep
from activity_eda.config.app_config import AppConfig
from activity_eda.observability.instrumentation import Instrumentation
from activity_eda.utils.path import PathManager


def build_load_engine(cfg: AppConfig) -> DatasetLoadEngine:
    return DatasetLoadEngine(
        label_column=cfg.dataset.label_column,
        missing_tokens=cfg.dataset.missing_tokens,
    )


def build_prune_engine(cfg: AppConfig) -> FeaturePruneEngine:
    p = cfg.pruning
    return FeaturePruneEngine(
        variance_policy=p.variance_policy,
        freq_cut=p.freq_cut,
        unique_cut=p.unique_cut,
        missing_threshold=p.missing_threshold,
        identifier_columns=p.identifier_columns,
    )


def build_offline_analysis(
        cfg: AppConfig | None = None,
        *,
        inst: Instrumentation | None = None,
) -> AnalysisPipeline:
    """
    Offline Analysis Workflow

    load → prune → partition → {train → evaluate} per run
         → importance (right after its source run) → report → persist
    """

    if cfg is None:
        cfg = AppConfig.load()
    pm = PathManager()
    inst = inst if inst is not None else Instrumentation()

    steps = [
        DatasetLoadStep(build_load_engine(cfg), inst=inst),
        FeaturePruneStep(build_prune_engine(cfg), inst=inst),
        PartitionStep(
            PartitionEngine(
                train_fraction=cfg.partition.train_fraction,
                seed=cfg.partition.seed,
            ),
            inst=inst,
        ),
    ]

    evaluate_engine = EvaluateEngine()

    for run in cfg.training.runs:
        engine = resolve_model_train_engine(
            family=run.family, cfg=cfg.training, param_grid=run.param_grid
        )
        steps.append(ModelTrainStep(run=run, engine=engine, inst=inst))
        steps.append(ModelEvaluateStep(name=run.name, engine=evaluate_engine, inst=inst))

        if run.name == cfg.importance.source:
            steps.append(
                ImportanceReduceStep(
                    engine=ImportanceEngine(
                        method=cfg.importance.method,
                        seed=cfg.training.seed,
                    ),
                    source=cfg.importance.source,
                    threshold=cfg.importance.threshold,
                    mode=cfg.importance.mode,
                    inst=inst,
                )
            )

    steps.append(
        ReportStep(
            engine=ReportEngine(dpi=cfg.report.dpi, cmap=cfg.report.heatmap_cmap),
            top_n=cfg.importance.top_n,
            threshold=cfg.importance.threshold,
            inst=inst,
        )
    )
    steps.append(ArtifactPersistStep(inst=inst))

    return AnalysisPipeline(
        steps=steps,
        pm=pm,
        inst=inst,
        cfg=cfg,
        output_dir=cfg.report.output_dir,
    )


def resolve_data_path(cfg: AppConfig, data_path: Path | str | None = None) -> Path:
    """
    CLI argument > config. Relative paths resolve against cwd; a relative
    config path missing there falls back to the project root (source checkout).
    """
    if data_path is not None:
        return PathManager.resolve_user_path(data_path)

    if cfg.dataset.path is None:
        raise ValueError("no dataset path given (argument, config or EDA_DATASET_PATH)")

    p = PathManager.resolve_user_path(cfg.dataset.path)
    if p.exists() or Path(cfg.dataset.path).is_absolute():
        return p
    return PathManager.root() / cfg.dataset.path
