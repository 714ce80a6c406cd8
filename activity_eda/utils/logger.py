#!filepath: activity_eda/utils/logger.py
import os
from functools import wraps
from time import perf_counter
from typing import Callable

from loguru import logger

_LOGGER_CONFIGURED = False


class Logging:
    """
    分析运行日志
    ---------------------------------------
    - 按日期切割
    - 日志保留周期
    - 函数级日志装饰器 (catch)
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    @classmethod
    def from_config(cls, cfg) -> "Logging":
        """Build from a LogConfig (dir / rotation / retention / level)."""
        return cls(
            log_dir=cfg.dir,
            rotation=cfg.rotation,
            retention=cfg.retention,
            log_level=cfg.level,
        )

    def _configure(self) -> None:
        """
        替换全局 loguru sink：同一进程只保留一个文件 sink
        """
        global _LOGGER_CONFIGURED

        logger.remove()

        logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            backtrace=True,
            diagnose=False,
        )

        if not _LOGGER_CONFIGURED:
            logger.info("\n-----------Logger initialized successfully.-----------")
        _LOGGER_CONFIGURED = True

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_time: bool = True,
    ) -> Callable:
        """
        记录异常并原样抛出；可选记录耗时。

        用法：
            @logs.catch("load failed")
            def load(path): ...
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


# 默认全局 logs（CLI 会按配置重新 configure）
logs = Logging()
