#!filepath: tracktime/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .stopwatch_config import StopwatchConfig

# 环境变量 → (section, key)
ENV_OVERRIDES = {
    "TRACKTIME_NAME": ("stopwatch", "name"),
    "TRACKTIME_CLOCK": ("stopwatch", "clock"),
    "TRACKTIME_LOG_LEVEL": ("log", "level"),
    "TRACKTIME_LOG_DIR": ("log", "dir"),
}


def package_root() -> str:
    """
    tracktime/config/app_config.py → tracktime/config → tracktime
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def default_config_path() -> str:
    return os.path.join(package_root(), "config", "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    stopwatch: StopwatchConfig = Field(default_factory=StopwatchConfig)

    @classmethod
    def load(cls, path: str | None = None, env_file: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用包内 tracktime/config/base.yml
        - .env 默认取当前工作目录（不存在则忽略）
        - TRACKTIME_* 环境变量覆盖 YAML
        """
        # 1) 先加载 .env
        load_dotenv(env_file or os.path.join(os.getcwd(), ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 空 section（`stopwatch:`）读出来是 None，按默认值处理
        raw = {name: data for name, data in raw.items() if data is not None}

        # 4) env 覆盖
        for env_key, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value:
                section_data = raw.get(section) or {}
                section_data[key] = value
                raw[section] = section_data

        return cls(**raw)
