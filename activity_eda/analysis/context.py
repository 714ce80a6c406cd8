# activity_eda/analysis/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from activity_eda.analysis.dataset import Dataset, Partition
from activity_eda.analysis.engines.evaluate_engine import Evaluation
from activity_eda.analysis.engines.feature_prune_engine import PruneResult
from activity_eda.analysis.engines.importance_engine import ImportanceRanking
from activity_eda.analysis.engines.train_result import TrainResult
from activity_eda.analysis.features import FeatureFormula


@dataclass
class AnalysisContext:
    """
    AnalysisContext

    Semantics:
    - One context == one analysis run
    - run_id is immutable and mandatory
    - Steps only replace values, never mutate them in place
    """

    # -------------------------
    # Identity
    # -------------------------
    run_id: str

    # -------------------------
    # Static bindings
    # -------------------------
    cfg: Any
    inst: Any
    data_path: Path
    staging_dir: Path

    # -------------------------
    # Data
    # -------------------------
    raw: Optional[Dataset] = None
    prune: Optional[PruneResult] = None
    dataset: Optional[Dataset] = None
    partition: Optional[Partition] = None
    train_set: Optional[Dataset] = None
    test_set: Optional[Dataset] = None

    # -------------------------
    # Models (keyed by run name, insertion order = run order)
    # -------------------------
    results: Dict[str, TrainResult] = field(default_factory=dict)
    evaluations: Dict[str, Evaluation] = field(default_factory=dict)

    importance: Optional[ImportanceRanking] = None
    reduced_formula: Optional[FeatureFormula] = None

    metrics: Dict[str, Any] = field(default_factory=dict)

    # set by the pipeline after commit
    output_dir: Optional[Path] = None
