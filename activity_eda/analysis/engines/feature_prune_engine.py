# activity_eda/analysis/engines/feature_prune_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence, Tuple

import numpy as np
import pandas as pd

from activity_eda.analysis.dataset import Dataset


STAT_COLUMNS = [
    "freq_ratio",
    "percent_unique",
    "n_distinct",
    "zero_var",
    "near_zero_var",
    "missing_ratio",
]


@dataclass(frozen=True, eq=False)
class PruneResult:
    """
    Pruned dataset + the three exclusion sets (for reporting).
    """
    dataset: Dataset
    near_zero_variance: Tuple[str, ...]
    high_missing: Tuple[str, ...]
    identifiers: Tuple[str, ...]
    stats: pd.DataFrame

    @property
    def excluded(self) -> Tuple[str, ...]:
        union = set(self.near_zero_variance) | set(self.high_missing) | set(self.identifiers)
        return tuple(c for c in self.stats.index if c in union)

    def exclusion_sets(self) -> dict:
        return {
            "near_zero_variance": list(self.near_zero_variance),
            "high_missing": list(self.high_missing),
            "identifiers": list(self.identifiers),
        }


class FeaturePruneEngine:
    """
    FeaturePruneEngine

    Responsibility:
    - Column statistics (frequency ratio / percent unique / missingness)
    - Three exclusion sets:
        1) near-zero variance (policy: zero_var | near_zero_var)
        2) missing ratio > missing_threshold
        3) identifier columns (fixed list)

    Contract:
    - Statistics are measured on the dataset given (the FULL dataset)
    - The label column is never excluded
    """

    def __init__(
            self,
            *,
            variance_policy: Literal["zero_var", "near_zero_var"] = "zero_var",
            freq_cut: float = 95 / 5,
            unique_cut: float = 10.0,
            missing_threshold: float = 0.9,
            identifier_columns: Sequence[str] = (),
    ):
        self.variance_policy = variance_policy
        self.freq_cut = freq_cut
        self.unique_cut = unique_cut
        self.missing_threshold = missing_threshold
        self.identifier_columns = list(identifier_columns)

    # ======================================================================
    # Public API
    # ======================================================================
    def column_stats(self, dataset: Dataset) -> pd.DataFrame:
        n_rows = dataset.n_rows
        records = {
            col: self._one_column(dataset.frame[col], n_rows)
            for col in dataset.feature_columns
        }
        stats = pd.DataFrame.from_dict(records, orient="index", columns=STAT_COLUMNS)
        stats.index.name = "column"
        return stats

    def prune(self, dataset: Dataset) -> PruneResult:
        stats = self.column_stats(dataset)

        near_zero = tuple(stats.index[stats[self.variance_policy].astype(bool)])
        high_missing = tuple(stats.index[stats["missing_ratio"] > self.missing_threshold])
        features = set(dataset.feature_columns)
        identifiers = tuple(c for c in self.identifier_columns if c in features)

        stats = stats.copy()
        stats["excluded_by"] = [
            ",".join(
                reason for reason, members in (
                    ("near_zero_variance", near_zero),
                    ("high_missing", high_missing),
                    ("identifier", identifiers),
                ) if col in members
            )
            for col in stats.index
        ]

        excluded = set(near_zero) | set(high_missing) | set(identifiers)
        pruned = dataset.drop_columns(c for c in dataset.feature_columns if c in excluded)

        return PruneResult(
            dataset=pruned,
            near_zero_variance=near_zero,
            high_missing=high_missing,
            identifiers=identifiers,
            stats=stats,
        )

    # ======================================================================
    # Internal
    # ======================================================================
    def _one_column(self, s: pd.Series, n_rows: int) -> list:
        counts = s.dropna().value_counts()
        n_distinct = int(len(counts))

        if n_distinct <= 1:
            freq_ratio = 0.0
        else:
            freq_ratio = float(counts.iloc[0] / counts.iloc[1])

        percent_unique = n_distinct / n_rows * 100 if n_rows else 0.0
        zero_var = n_distinct <= 1
        near_zero_var = zero_var or (
            freq_ratio > self.freq_cut and percent_unique <= self.unique_cut
        )
        missing_ratio = float(s.isna().mean()) if n_rows else 0.0

        return [
            freq_ratio,
            float(percent_unique),
            n_distinct,
            bool(zero_var),
            bool(near_zero_var),
            float(np.clip(missing_ratio, 0.0, 1.0)),
        ]
