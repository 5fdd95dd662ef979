#!filepath: tracktime/utils/logger.py
import os
import json
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger


class Logging:
    """
    tracktime 日志模块（loguru 封装）
    ---------------------------------------
    - 默认不写文件：import 库时不创建任何目录
    - configure() 之后按日期切割 + 保留周期
    - 包含函数级日志装饰器 catch()
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.configured = False

        if self.log_dir is not None:
            self.configure()

    def configure(self, log_dir: Optional[str] = None, log_level: Optional[str] = None) -> None:
        """
        安装文件 sink，替换 loguru 默认 handler
        """
        if log_dir is not None:
            self.log_dir = log_dir
        if log_level is not None:
            self.level = log_level
        if self.log_dir is None:
            raise ValueError("log_dir is required to configure file logging")

        os.makedirs(self.log_dir, exist_ok=True)

        logger.remove()
        logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,
            backtrace=True,
            diagnose=True,
        )

        self.configured = True
        logger.info("-----------Logger initialized successfully.-----------")

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
        log_inputs: bool = False,
        log_outputs: bool = False,
        log_time: bool = True,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    logger.info(
                        f"[CALL] {func.__name__} args={args}, "
                        f"kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_outputs:
                    logger.info(f"[RETURN] {func.__name__} result={result}")

                if log_time:
                    cost = perf_counter() - start
                    logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


def init_logging(config) -> Logging:
    """
    按 LogConfig 配置全局 logs（替换默认的无文件版本）
    """
    logs.rotation = config.rotation
    logs.retention = config.retention
    logs.configure(log_dir=config.dir, log_level=config.level)
    return logs


# 默认全局 logs（可被 init_logging 配置）
logs = Logging()
