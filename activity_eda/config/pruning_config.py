#!filepath: activity_eda/config/pruning_config.py
from typing import List, Literal

from pydantic import BaseModel, Field


DEFAULT_IDENTIFIER_COLUMNS = [
    "X",
    "user_name",
    "raw_timestamp_part_1",
    "raw_timestamp_part_2",
    "cvtd_timestamp",
    "new_window",
    "num_window",
]


class PruningConfig(BaseModel):
    # zero_var: 仅剔除单一取值列；near_zero_var: freq_cut / unique_cut 阈值对
    variance_policy: Literal["zero_var", "near_zero_var"] = "zero_var"
    freq_cut: float = Field(default=95 / 5, gt=1.0)
    unique_cut: float = Field(default=10.0, ge=0.0, le=100.0)

    missing_threshold: float = Field(default=0.9, ge=0.0, le=1.0)

    identifier_columns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_IDENTIFIER_COLUMNS)
    )
