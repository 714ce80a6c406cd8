#!filepath: activity_eda/config/app_config.py
from __future__ import annotations

import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from .log_config import LogConfig
from .dataset_config import DatasetConfig
from .pruning_config import PruningConfig
from .partition_config import PartitionConfig
from .training_config import TrainingConfig
from .importance_config import ImportanceConfig
from .report_config import ReportConfig


def project_root() -> str:
    """
    activity_eda/config/app_config.py → activity_eda/config → activity_eda → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    pruning: PruningConfig = Field(default_factory=PruningConfig)
    partition: PartitionConfig = Field(default_factory=PartitionConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    importance: ImportanceConfig = Field(default_factory=ImportanceConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @model_validator(mode="after")
    def _importance_source_precedes_reduced(self) -> "AppConfig":
        """
        reduced run 依赖 importance.source，source 必须是更早的 run
        """
        names = [r.name for r in self.training.runs]
        reduced = [i for i, r in enumerate(self.training.runs) if r.features == "reduced"]
        if not reduced:
            return self

        if self.importance.source not in names:
            raise ValueError(
                f"importance.source={self.importance.source!r} is not a model run: {names}"
            )

        src_idx = names.index(self.importance.source)
        if self.training.runs[src_idx].features == "reduced":
            raise ValueError("importance.source must be a full-feature run")
        if min(reduced) < src_idx:
            raise ValueError(
                "reduced runs must come after importance.source in training.runs"
            )
        return self

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 activity_eda/config/base.yml
        - 不依赖当前工作目录
        - EDA_DATASET_PATH / EDA_OUTPUT_DIR 覆盖 YAML
        """
        root = project_root()

        # 1) 先加载 .env（在项目根目录下）
        load_dotenv(os.path.join(root, ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env 覆盖
        dataset_path = os.getenv("EDA_DATASET_PATH")
        if dataset_path:
            raw.setdefault("dataset", {})["path"] = dataset_path

        output_dir = os.getenv("EDA_OUTPUT_DIR")
        if output_dir:
            raw.setdefault("report", {})["output_dir"] = output_dir

        return cls(**raw)
