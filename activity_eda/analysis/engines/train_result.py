from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np

from activity_eda.analysis.features import FeatureFormula


@dataclass(frozen=True, eq=False)
class TrainResult:
    """
    TrainResult（FROZEN）

    语义：
    - 一次完整训练的纯内存态结果（不含 I/O）
    - model 已在整个训练集上 refit
    - 不持有训练数据
    """
    name: str
    family: str
    model: Any
    formula: FeatureFormula
    input_columns: Tuple[str, ...]
    feature_names: Tuple[str, ...]
    best_params: Dict[str, Any] = field(default_factory=dict)
    fold_scores: Tuple[float, ...] = ()

    @property
    def cv_accuracy(self) -> float:
        return float(np.mean(self.fold_scores)) if self.fold_scores else float("nan")

    @property
    def cv_std(self) -> float:
        return float(np.std(self.fold_scores, ddof=1)) if len(self.fold_scores) > 1 else float("nan")

    @property
    def classes(self) -> list:
        return list(self.model.classes_)
