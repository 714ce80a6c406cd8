#!filepath: activity_eda/config/partition_config.py
from pydantic import BaseModel, Field


class PartitionConfig(BaseModel):
    train_fraction: float = Field(default=0.9, gt=0.0, lt=1.0)
    seed: int = 42
