# activity_eda/analysis/dataset.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from activity_eda.utils.errors import SchemaError


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Dataset（IMMUTABLE）

    Semantics:
    - Ordered rows, stable column set
    - label_column is a pandas Categorical once loaded
    - drop_columns / take return NEW datasets
    """

    frame: pd.DataFrame
    label_column: str = "classe"

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def n_rows(self) -> int:
        return len(self.frame)

    @property
    def columns(self) -> List[str]:
        return [str(c) for c in self.frame.columns]

    @property
    def feature_columns(self) -> List[str]:
        return [c for c in self.columns if c != self.label_column]

    # ------------------------------------------------------------------
    # Label
    # ------------------------------------------------------------------
    @property
    def has_label(self) -> bool:
        return self.label_column in self.frame.columns

    def require_label(self) -> None:
        if not self.has_label:
            raise SchemaError(
                f"label column {self.label_column!r} not found in dataset"
            )

    @property
    def labels(self) -> pd.Series:
        self.require_label()
        return self.frame[self.label_column]

    @property
    def label_domain(self) -> list:
        labels = self.labels
        if isinstance(labels.dtype, pd.CategoricalDtype):
            return list(labels.cat.categories)
        return sorted(pd.unique(labels.dropna()))

    def label_array(self) -> np.ndarray:
        """Labels as a plain object array (what sklearn sees)."""
        return self.labels.astype(object).to_numpy()

    # ------------------------------------------------------------------
    # Derivations
    # ------------------------------------------------------------------
    def drop_columns(self, names: Iterable[str]) -> "Dataset":
        drop = [c for c in names if c in self.frame.columns and c != self.label_column]
        return Dataset(frame=self.frame.drop(columns=drop), label_column=self.label_column)

    def take(self, indices: Sequence[int]) -> "Dataset":
        sub = self.frame.iloc[np.asarray(indices, dtype=int)].reset_index(drop=True)
        return Dataset(frame=sub, label_column=self.label_column)


@dataclass(frozen=True, eq=False)
class Partition:
    """
    Partition（FROZEN）

    - train / test: sorted, disjoint row-index arrays
    - train ∪ test == range(n_rows)
    """

    train: np.ndarray
    test: np.ndarray
    seed: int
    train_fraction: float
    n_rows: int = field(default=0)

    def __post_init__(self):
        for arr in (self.train, self.test):
            arr.setflags(write=False)

    def summary(self, dataset: Dataset) -> pd.DataFrame:
        """
        Per-label counts / proportions in full / train / test.
        """
        labels = dataset.labels
        domain = dataset.label_domain

        def _counts(idx: np.ndarray | None) -> pd.Series:
            part = labels if idx is None else labels.iloc[idx]
            return part.value_counts().reindex(domain, fill_value=0)

        full, train, test = _counts(None), _counts(self.train), _counts(self.test)

        df = pd.DataFrame(
            {
                "full_n": full,
                "train_n": train,
                "test_n": test,
            }
        )
        for part, total in (("full", len(labels)), ("train", len(self.train)), ("test", len(self.test))):
            df[f"{part}_pct"] = df[f"{part}_n"] / total * 100 if total else 0.0

        df.index.name = dataset.label_column
        return df[["full_n", "full_pct", "train_n", "train_pct", "test_n", "test_pct"]]
