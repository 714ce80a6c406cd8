# activity_eda/analysis/engines/model/random_forest_train_engine.py
from __future__ import annotations

import numpy as np
from sklearn.ensemble import RandomForestClassifier

from activity_eda.analysis.engines.model_train_engine import ModelTrainEngine


def max_features_grid(n_features: int, length: int = 3) -> list[int]:
    """
    Up to `length` integers evenly spaced from 2 to n_features.
    """
    if n_features <= 2:
        return [max(n_features, 1)]
    return sorted({int(v) for v in np.linspace(2, n_features, length)})


class RandomForestTrainEngine(ModelTrainEngine):
    family = "random_forest"

    def __init__(self, *, n_estimators: int = 100, **kwargs):
        super().__init__(**kwargs)
        self.n_estimators = n_estimators

    def build_estimator(self):
        return RandomForestClassifier(
            n_estimators=self.n_estimators,
            random_state=self.seed,
        )

    def default_param_grid(self, n_features: int):
        return {"max_features": max_features_grid(n_features)}
