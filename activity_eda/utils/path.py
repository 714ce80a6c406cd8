#!filepath: activity_eda/utils/path.py
from pathlib import Path
from typing import Optional

from activity_eda import logs


class PathManager:
    """
    项目目录结构：

    <root>
     ├── activity_eda/
     │     └── config/base.yml
     ├── data/
     │     └── pml-training.csv
     ├── reports/
     │     ├── <run_id>/
     │     └── .staging/<run_id>/
     └── logs/
    """

    _root: Optional[Path] = None

    # ---------------------------------------------------------
    # root detection
    # ---------------------------------------------------------
    @classmethod
    def detect_root(cls) -> Path:
        """
        源码 checkout：<root>/activity_eda/utils/path.py 且 <root>/pyproject.toml 存在
        → root = parents[2]
        安装到 site-packages 时没有 pyproject.toml → root = cwd()
        """
        current = Path(__file__).resolve()

        checkout = current.parents[2]
        if (checkout / "pyproject.toml").is_file():
            logs.debug(f"[PathManager] detect_root = {checkout}")
            return checkout

        logs.debug("[PathManager] not a source checkout, root = cwd()")
        return Path.cwd()

    @classmethod
    def root(cls) -> Path:
        if cls._root is None:
            cls._root = cls.detect_root()
        return cls._root

    @classmethod
    def set_root(cls, new_root: Path | str | None):
        if new_root is None:
            cls._root = None
        else:
            cls._root = Path(new_root).resolve()
        logs.debug(f"[PathManager] set_root = {cls._root}")

    # ---------------------------------------------------------
    # Top-level dirs
    # ---------------------------------------------------------
    @classmethod
    def data_dir(cls) -> Path:
        return cls.root() / "data"

    @classmethod
    def reports_dir(cls) -> Path:
        return cls.root() / "reports"

    @classmethod
    def logs_dir(cls) -> Path:
        return cls.root() / "logs"

    # ---------------------------------------------------------
    # config
    # ---------------------------------------------------------
    @classmethod
    def config_dir(cls) -> Path:
        """包内配置：activity_eda/config/"""
        return Path(__file__).resolve().parents[1] / "config"

    @classmethod
    def config_file(cls, name: str = "base.yml") -> Path:
        return cls.config_dir() / name

    # ---------------------------------------------------------
    # run-scoped output
    # ---------------------------------------------------------
    @classmethod
    def resolve_user_path(cls, p: Path | str) -> Path:
        """用户给出的相对路径（CLI / 配置）相对 cwd 解析"""
        p = Path(p)
        return p if p.is_absolute() else Path.cwd() / p

    @classmethod
    def _output_root(cls, output_dir: Path | str | None) -> Path:
        if output_dir is None:
            return cls.reports_dir()
        return cls.resolve_user_path(output_dir)

    @classmethod
    def run_dir(cls, run_id: str, output_dir: Path | str | None = None) -> Path:
        return cls._output_root(output_dir) / run_id

    @classmethod
    def staging_dir(cls, run_id: str, output_dir: Path | str | None = None) -> Path:
        """Steps 只写 staging；成功后整体 rename 到 run_dir"""
        return cls._output_root(output_dir) / ".staging" / run_id
