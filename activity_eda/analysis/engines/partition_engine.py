# activity_eda/analysis/engines/partition_engine.py
from __future__ import annotations

import numpy as np
from sklearn.model_selection import train_test_split

from activity_eda.analysis.dataset import Dataset, Partition
from activity_eda.utils.errors import SchemaError


class PartitionEngine:
    """
    PartitionEngine

    Responsibility:
    - Stratified train / test split by label proportion

    Contract:
    - deterministic given seed
    - train ∩ test = ∅, train ∪ test = all rows
    """

    def __init__(self, *, train_fraction: float = 0.9, seed: int = 42):
        if not 0.0 < train_fraction < 1.0:
            raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")
        self.train_fraction = train_fraction
        self.seed = seed

    def split(self, dataset: Dataset) -> Partition:
        dataset.require_label()

        y = dataset.label_array()
        values, counts = np.unique(y, return_counts=True)
        rare = [str(v) for v, n in zip(values, counts) if n < 2]
        if rare:
            raise SchemaError(
                f"label values with fewer than 2 rows cannot be stratified: {rare}"
            )

        idx = np.arange(dataset.n_rows)
        try:
            train_idx, test_idx = train_test_split(
                idx,
                train_size=self.train_fraction,
                stratify=y,
                random_state=self.seed,
                shuffle=True,
            )
        except ValueError as e:
            raise SchemaError(f"cannot stratify {dataset.n_rows} rows: {e}") from e

        return Partition(
            train=np.sort(train_idx),
            test=np.sort(test_idx),
            seed=self.seed,
            train_fraction=self.train_fraction,
            n_rows=dataset.n_rows,
        )
