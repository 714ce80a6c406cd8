# activity_eda/analysis/engines/model_train_engine.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import numpy as np
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from activity_eda import logs
from activity_eda.analysis.dataset import Dataset
from activity_eda.analysis.engines.train_result import TrainResult
from activity_eda.analysis.features import FeatureFormula, build_feature_matrix
from activity_eda.utils.errors import TrainingError


def make_folds(folds: int, seed: int) -> StratifiedKFold:
    return StratifiedKFold(n_splits=folds, shuffle=True, random_state=seed)


def fold_assignments(y: np.ndarray, folds: int, seed: int) -> np.ndarray:
    """
    Fold id (0..folds-1) of every row; deterministic given seed.
    """
    y = np.asarray(y)
    assignment = np.full(len(y), -1, dtype=int)
    for fold, (_, valid_idx) in enumerate(make_folds(folds, seed).split(np.zeros(len(y)), y)):
        assignment[valid_idx] = fold
    return assignment


class ModelTrainEngine(ABC):
    """
    Abstract ModelTrainEngine

    Training semantics (shared by every family):
    - k stratified folds on the TRAINING partition
    - grid search over the family's parameter grid (accuracy)
    - selected configuration refit on the whole training partition

    A concrete engine only decides:
    - the estimator
    - the default search grid
    """

    family: str = ""

    def __init__(
            self,
            *,
            folds: int = 5,
            seed: int = 42,
            n_jobs: Optional[int] = None,
            param_grid: Optional[Dict[str, List[Any]]] = None,
    ):
        self.folds = folds
        self.seed = seed
        self.n_jobs = n_jobs
        self.param_grid = param_grid

    @abstractmethod
    def build_estimator(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def default_param_grid(self, n_features: int) -> Dict[str, List[Any]]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @logs.catch("model training failed")
    def train(
            self,
            *,
            name: str,
            dataset: Dataset,
            formula: FeatureFormula,
    ) -> TrainResult:
        columns = formula.resolve(dataset)
        if not columns:
            raise TrainingError(
                f"[{name}] no feature columns for {formula.describe(dataset.label_column)}"
            )

        X = build_feature_matrix(dataset.frame, columns)
        y = dataset.label_array()
        self._check_labels(name, y)

        grid = self.param_grid or self.default_param_grid(X.shape[1])

        search = GridSearchCV(
            self.build_estimator(),
            grid,
            scoring="accuracy",
            cv=make_folds(self.folds, self.seed),
            refit=True,
            n_jobs=self.n_jobs,
            error_score="raise",
        )

        try:
            search.fit(X, y)
        except Exception as e:
            raise TrainingError(f"[{name}] {self.family} fit failed: {e}") from e

        best = search.best_index_
        fold_scores = tuple(
            float(search.cv_results_[f"split{i}_test_score"][best])
            for i in range(self.folds)
        )

        return TrainResult(
            name=name,
            family=self.family,
            model=search.best_estimator_,
            formula=formula,
            input_columns=tuple(columns),
            feature_names=tuple(X.columns),
            best_params=dict(search.best_params_),
            fold_scores=fold_scores,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _check_labels(self, name: str, y: np.ndarray) -> None:
        values, counts = np.unique(y, return_counts=True)

        if len(values) < 2:
            raise TrainingError(
                f"[{name}] training labels hold a single class: {list(values)}"
            )

        small = {str(v): int(n) for v, n in zip(values, counts) if n < self.folds}
        if small:
            raise TrainingError(
                f"[{name}] classes smaller than folds={self.folds}: {small}"
            )
