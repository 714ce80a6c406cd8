# activity_eda/analysis/engines/model/decision_tree_train_engine.py
from __future__ import annotations

from sklearn.tree import DecisionTreeClassifier

from activity_eda.analysis.engines.model_train_engine import ModelTrainEngine


class DecisionTreeTrainEngine(ModelTrainEngine):
    """
    CART tree; the search grid is over cost-complexity pruning.
    """

    family = "decision_tree"

    def build_estimator(self):
        return DecisionTreeClassifier(random_state=self.seed)

    def default_param_grid(self, n_features: int):
        return {"ccp_alpha": [0.0, 0.001, 0.01]}
