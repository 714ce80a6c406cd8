# activity_eda/config/training_config.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class ModelRunConfig(BaseModel):
    """
    One model configuration of the comparison.

    features:
      - all     : every non-label column that survived pruning
      - reduced : feature set derived from the importance ranking
    """

    name: str
    family: Literal["decision_tree", "random_forest"]
    features: Literal["all", "reduced"] = "all"

    # 覆盖默认搜索网格 (param -> candidates)
    param_grid: Optional[Dict[str, List[Any]]] = None


def _default_runs() -> List[ModelRunConfig]:
    return [
        ModelRunConfig(name="tree", family="decision_tree"),
        ModelRunConfig(name="forest", family="random_forest"),
        ModelRunConfig(
            name="pruned_forest", family="random_forest", features="reduced"
        ),
    ]


class TrainingConfig(BaseModel):
    """
    TrainingConfig（FINAL）
    """

    folds: int = Field(default=5, ge=2)
    seed: int = 42
    n_jobs: Optional[int] = None

    # random forest
    n_estimators: int = Field(default=100, ge=1)

    runs: List[ModelRunConfig] = Field(default_factory=_default_runs)

    @model_validator(mode="after")
    def _unique_run_names(self) -> "TrainingConfig":
        names = [r.name for r in self.runs]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate model run names: {names}")
        if not names:
            raise ValueError("at least one model run is required")
        return self
