#!filepath: activity_eda/config/importance_config.py
from typing import Literal

from pydantic import BaseModel, Field


class ImportanceConfig(BaseModel):
    # 哪个 model run 的重要性用于构造 reduced 特征集
    source: str = "forest"
    method: Literal["impurity", "permutation"] = "impurity"
    threshold: float = Field(default=33.0, ge=0.0, le=100.0)

    # keep: 只保留高重要性特征；drop: 从全集中剔除高重要性特征
    mode: Literal["keep", "drop"] = "keep"

    top_n: int = Field(default=20, ge=1)
