from typing import Any, Callable, Dict, List, Optional

from activity_eda.analysis.engines.model_train_engine import ModelTrainEngine
from activity_eda.analysis.engines.model.decision_tree_train_engine import (
    DecisionTreeTrainEngine,
)
from activity_eda.analysis.engines.model.random_forest_train_engine import (
    RandomForestTrainEngine,
)
from activity_eda.config.training_config import TrainingConfig

_ENGINE_REGISTRY: Dict[
    str,
    Callable[[TrainingConfig, Optional[Dict[str, List[Any]]]], ModelTrainEngine],
] = {
    "decision_tree": lambda cfg, grid: DecisionTreeTrainEngine(
        folds=cfg.folds, seed=cfg.seed, n_jobs=cfg.n_jobs, param_grid=grid,
    ),
    "random_forest": lambda cfg, grid: RandomForestTrainEngine(
        n_estimators=cfg.n_estimators,
        folds=cfg.folds, seed=cfg.seed, n_jobs=cfg.n_jobs, param_grid=grid,
    ),
}


def resolve_model_train_engine(
        *,
        family: str,
        cfg: TrainingConfig,
        param_grid: Optional[Dict[str, List[Any]]] = None,
) -> ModelTrainEngine:
    if family not in _ENGINE_REGISTRY:
        available = ", ".join(_ENGINE_REGISTRY)
        raise ValueError(
            f"No ModelTrainEngine for {family!r}. Available: {available}"
        )

    return _ENGINE_REGISTRY[family](cfg, param_grid)
