#!filepath: activity_eda/utils/filesystem.py
import shutil
from pathlib import Path

from activity_eda import logs


class FileSystem:
    """
    统一文件系统工具
    - 自动创建目录
    - 安全写入文件（临时文件 → rename）
    - staging 目录整体提交
    - 删除文件/目录
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] mkdir: {p}")
        return p

    @staticmethod
    def safe_write_text(path: str | Path, text: str) -> Path:
        """
        原子写入（避免部分写入导致文件损坏）
            1) 先写入 tmp 文件
            2) rename → 正式文件
        """
        path = Path(path)
        FileSystem.ensure_dir(path.parent)

        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(path)

        logs.debug(f"[FS] atomic write: {path}")
        return path

    @staticmethod
    def commit_dir(staging: str | Path, target: str | Path) -> Path:
        """
        staging → target（target 已存在则先删除）
        """
        staging = Path(staging)
        target = Path(target)

        if not staging.exists():
            raise FileNotFoundError(f"staging dir not found: {staging}")

        if target.exists():
            FileSystem.remove(target)

        FileSystem.ensure_dir(target.parent)
        staging.replace(target)
        logs.debug(f"[FS] commit {staging} -> {target}")
        return target

    @staticmethod
    def remove(path: str | Path) -> None:
        p = Path(path)

        if not p.exists():
            logs.debug(f"[FS] path does not exist, skip remove: {p}")
            return

        if p.is_dir():
            shutil.rmtree(p)
            logs.debug(f"[FS] removed dir: {p}")
        else:
            p.unlink()
            logs.debug(f"[FS] removed file: {p}")

    @staticmethod
    def remove_if_empty(path: str | Path) -> bool:
        """
        删除空目录；非空或不存在时保持原样
        """
        p = Path(path)
        if p.is_dir() and not any(p.iterdir()):
            p.rmdir()
            logs.debug(f"[FS] removed empty dir: {p}")
            return True
        return False
