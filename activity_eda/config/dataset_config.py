#!filepath: activity_eda/config/dataset_config.py
from typing import List, Optional

from pydantic import BaseModel, Field


class DatasetConfig(BaseModel):
    path: Optional[str] = None
    label_column: str = "classe"

    # 只有这些字面量视为缺失值（关闭 pandas 默认 NA 集合）
    missing_tokens: List[str] = Field(
        default_factory=lambda: ["", "#DIV/0!", "NA"]
    )
