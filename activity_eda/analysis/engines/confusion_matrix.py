# activity_eda/analysis/engines/confusion_matrix.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd
from scipy.stats import beta


@dataclass(frozen=True, eq=False)
class ConfusionMatrix:
    """
    rows = true label (reference), columns = predicted label.
    """

    labels: Tuple
    counts: np.ndarray

    def __post_init__(self):
        n = len(self.labels)
        if self.counts.shape != (n, n):
            raise ValueError(
                f"counts shape {self.counts.shape} does not match {n} labels"
            )
        self.counts.setflags(write=False)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------
    @property
    def total(self) -> int:
        return int(self.counts.sum())

    @property
    def correct(self) -> int:
        return int(np.trace(self.counts))

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return float("nan")
        return self.correct / self.total

    @property
    def out_of_sample_error(self) -> float:
        return 1.0 - self.accuracy

    @property
    def kappa(self) -> float:
        """Cohen's kappa from the marginals."""
        total = self.total
        if total == 0:
            return float("nan")
        expected = float(
            (self.counts.sum(axis=1) * self.counts.sum(axis=0)).sum()
        ) / total ** 2
        if expected == 1.0:
            return float("nan")
        return (self.accuracy - expected) / (1.0 - expected)

    def accuracy_ci(self, level: float = 0.95) -> Tuple[float, float]:
        """
        Exact (Clopper-Pearson) binomial interval for accuracy.
        """
        n, x = self.total, self.correct
        if n == 0:
            return float("nan"), float("nan")

        alpha = 1.0 - level
        lower = 0.0 if x == 0 else float(beta.ppf(alpha / 2, x, n - x + 1))
        upper = 1.0 if x == n else float(beta.ppf(1 - alpha / 2, x + 1, n - x))
        return lower, upper

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------
    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(
            self.counts,
            index=pd.Index(self.labels, name="reference"),
            columns=pd.Index(self.labels, name="prediction"),
        )
        return df

    def per_class(self) -> pd.DataFrame:
        """
        One-vs-rest statistics per label.
        """
        counts = self.counts.astype(float)
        total = counts.sum()
        tp = np.diag(counts)
        actual = counts.sum(axis=1)
        predicted = counts.sum(axis=0)
        fp = predicted - tp
        fn = actual - tp
        tn = total - tp - fp - fn

        with np.errstate(divide="ignore", invalid="ignore"):
            df = pd.DataFrame(
                {
                    "support": actual.astype(int),
                    "sensitivity": tp / actual,
                    "specificity": tn / (tn + fp),
                    "precision": tp / predicted,
                    "prevalence": actual / total if total else np.nan,
                },
                index=pd.Index(self.labels, name="class"),
            )
        return df
