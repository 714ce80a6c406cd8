#!filepath: tests/analysis/test_model_train_engine.py
import numpy as np
import pandas as pd
import pytest
from loguru import logger
from sklearn.base import BaseEstimator, ClassifierMixin

from activity_eda.analysis.engines.model.decision_tree_train_engine import DecisionTreeTrainEngine
from activity_eda.analysis.engines.model.random_forest_train_engine import (
    RandomForestTrainEngine,
    max_features_grid,
)
from activity_eda.analysis.engines.model_train_engine import ModelTrainEngine, fold_assignments
from activity_eda.analysis.engines.registry import resolve_model_train_engine
from activity_eda.analysis.features import FeatureFormula
from activity_eda.config.training_config import TrainingConfig
from activity_eda.utils.errors import TrainingError

from tests.conftest import make_even_frame, to_dataset


@pytest.fixture(scope="module")
def train_set():
    return to_dataset(make_even_frame(n_per_class=40, n_features=5, constant_feature=False))


def test_fold_assignments_deterministic():
    y = np.array(list("ABCDE") * 40)

    a = fold_assignments(y, 5, seed=1)
    b = fold_assignments(y, 5, seed=1)
    c = fold_assignments(y, 5, seed=2)

    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)
    assert set(a) == {0, 1, 2, 3, 4}
    # stratified: each fold holds 8 of every class
    for fold in range(5):
        _, counts = np.unique(y[a == fold], return_counts=True)
        assert counts.tolist() == [8] * 5


def test_max_features_grid():
    assert max_features_grid(52) == [2, 27, 52]
    assert max_features_grid(3) == [2, 3]
    assert max_features_grid(2) == [2]
    assert max_features_grid(1) == [1]


def test_tree_train_result(train_set):
    engine = DecisionTreeTrainEngine(folds=4, seed=0)
    result = engine.train(name="tree", dataset=train_set, formula=FeatureFormula.all())

    assert result.name == "tree"
    assert result.family == "decision_tree"
    assert len(result.fold_scores) == 4
    assert all(0.0 <= s <= 1.0 for s in result.fold_scores)
    assert result.cv_accuracy == pytest.approx(np.mean(result.fold_scores))
    assert result.best_params["ccp_alpha"] in (0.0, 0.001, 0.01)
    assert result.feature_names == ("f0", "f1", "f2", "f3", "f4")
    assert result.classes == ["A", "B", "C", "D", "E"]


def test_forest_respects_formula_and_grid(train_set):
    engine = RandomForestTrainEngine(
        n_estimators=10, folds=3, seed=0, param_grid={"max_features": [1]}
    )
    result = engine.train(
        name="small", dataset=train_set, formula=FeatureFormula.only(["f1", "f3"])
    )

    assert result.input_columns == ("f1", "f3")
    assert result.best_params == {"max_features": 1}
    assert result.model.n_features_in_ == 2


def test_training_is_deterministic(train_set):
    engine = RandomForestTrainEngine(n_estimators=10, folds=3, seed=9)

    a = engine.train(name="a", dataset=train_set, formula=FeatureFormula.all())
    b = engine.train(name="b", dataset=train_set, formula=FeatureFormula.all())

    assert a.fold_scores == b.fold_scores
    assert a.best_params == b.best_params


def test_single_class_rejected():
    frame = pd.DataFrame({"v": np.arange(20.0), "classe": ["A"] * 20})

    with pytest.raises(TrainingError, match="single class"):
        DecisionTreeTrainEngine(folds=3).train(
            name="tree", dataset=to_dataset(frame), formula=FeatureFormula.all()
        )


def test_class_smaller_than_folds_rejected():
    frame = pd.DataFrame({"v": np.arange(23.0), "classe": ["A"] * 20 + ["B"] * 3})

    with pytest.raises(TrainingError, match="folds"):
        DecisionTreeTrainEngine(folds=5).train(
            name="tree", dataset=to_dataset(frame), formula=FeatureFormula.all()
        )


def test_no_feature_columns_rejected(train_set):
    formula = FeatureFormula.without(train_set.feature_columns)

    with pytest.raises(TrainingError):
        DecisionTreeTrainEngine(folds=3).train(name="tree", dataset=train_set, formula=formula)


def test_registry():
    cfg = TrainingConfig(folds=3, seed=1, n_estimators=7)

    tree = resolve_model_train_engine(family="decision_tree", cfg=cfg)
    forest = resolve_model_train_engine(family="random_forest", cfg=cfg, param_grid={"max_features": [2]})

    assert isinstance(tree, DecisionTreeTrainEngine)
    assert isinstance(forest, RandomForestTrainEngine)
    assert forest.n_estimators == 7
    assert forest.folds == 3
    assert forest.param_grid == {"max_features": [2]}

    with pytest.raises(ValueError):
        resolve_model_train_engine(family="svm", cfg=cfg)


class _BrokenClassifier(ClassifierMixin, BaseEstimator):
    def __init__(self, depth=1):
        self.depth = depth

    def fit(self, X, y):
        raise RuntimeError("solver diverged")

    def predict(self, X):
        return np.zeros(len(X))


class _BrokenTrainEngine(ModelTrainEngine):
    family = "broken"

    def build_estimator(self):
        return _BrokenClassifier()

    def default_param_grid(self, n_features: int):
        return {"depth": [1]}


def test_any_fit_failure_becomes_training_error(train_set):
    with pytest.raises(TrainingError, match="solver diverged") as exc_info:
        _BrokenTrainEngine(folds=3).train(
            name="broken", dataset=train_set, formula=FeatureFormula.all()
        )

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_training_failure_is_logged(train_set):
    lines = []
    sink_id = logger.add(lambda msg: lines.append(str(msg)))
    try:
        with pytest.raises(TrainingError):
            _BrokenTrainEngine(folds=3).train(
                name="broken", dataset=train_set, formula=FeatureFormula.all()
            )
    finally:
        logger.remove(sink_id)

    assert any("[ERROR] train: model training failed" in line for line in lines)
