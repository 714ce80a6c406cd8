# activity_eda/analysis/engines/importance_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.inspection import permutation_importance

from activity_eda.analysis.dataset import Dataset
from activity_eda.analysis.engines.train_result import TrainResult
from activity_eda.analysis.features import (
    FeatureFormula,
    align_feature_matrix,
    source_column,
)


def normalize_importance(raw: Sequence[float]) -> np.ndarray:
    """
    raw / max(raw) * 100; top feature scores exactly 100.
    All-zero input stays zero.
    """
    raw = np.clip(np.asarray(raw, dtype=float), 0.0, None)
    top = raw.max() if raw.size else 0.0
    if top <= 0.0:
        return np.zeros_like(raw)
    return raw / top * 100.0


@dataclass(frozen=True, eq=False)
class ImportanceRanking:
    """
    feature name → normalized score in [0, 100], descending.
    """

    source: str
    scores: pd.Series

    @classmethod
    def from_raw(cls, source: str, names: Sequence[str], raw: Sequence[float]) -> "ImportanceRanking":
        scores = pd.Series(normalize_importance(raw), index=list(names), name="importance")
        scores.index.name = "feature"
        scores = scores.sort_values(ascending=False, kind="mergesort")
        return cls(source=source, scores=scores)

    def above(self, threshold: float) -> List[str]:
        return list(self.scores.index[self.scores > threshold])

    def top(self, n: int) -> pd.Series:
        return self.scores.head(n)

    def to_frame(self) -> pd.DataFrame:
        df = self.scores.to_frame()
        df["rank"] = np.arange(1, len(df) + 1)
        return df


class ImportanceEngine:
    """
    ImportanceEngine

    Responsibility:
    - Rank features of one fitted model
    - Derive the reduced FeatureFormula

    Methods:
    - impurity    : model.feature_importances_
    - permutation : mean accuracy drop on the given data (negatives → 0)
    """

    def __init__(
            self,
            *,
            method: Literal["impurity", "permutation"] = "impurity",
            seed: int = 42,
            n_repeats: int = 5,
    ):
        self.method = method
        self.seed = seed
        self.n_repeats = n_repeats

    def rank(
            self,
            *,
            result: TrainResult,
            dataset: Optional[Dataset] = None,
    ) -> ImportanceRanking:
        if self.method == "impurity":
            raw = getattr(result.model, "feature_importances_", None)
            if raw is None:
                raise ValueError(
                    f"[ImportanceEngine] {type(result.model).__name__} reports no feature_importances_"
                )
        else:
            if dataset is None:
                raise ValueError("[ImportanceEngine] permutation importance needs a dataset")
            X = align_feature_matrix(
                dataset.frame, result.input_columns, result.feature_names
            )
            pi = permutation_importance(
                result.model,
                X,
                dataset.label_array(),
                scoring="accuracy",
                n_repeats=self.n_repeats,
                random_state=self.seed,
            )
            raw = pi.importances_mean

        return ImportanceRanking.from_raw(result.name, result.feature_names, raw)

    @staticmethod
    def reduced_formula(
            *,
            ranking: ImportanceRanking,
            result: TrainResult,
            threshold: float,
            mode: Literal["keep", "drop"] = "keep",
    ) -> FeatureFormula:
        """
        keep → only the columns scoring above threshold
        drop → every column except those
        Encoded names map back to their input column.
        """
        names: List[str] = []
        for feature in ranking.above(threshold):
            col = source_column(feature, result.input_columns)
            if col not in names:
                names.append(col)

        if mode == "keep":
            return FeatureFormula.only(names)
        if mode == "drop":
            return FeatureFormula.without(names)
        raise ValueError(f"unknown reduction mode: {mode!r}")
