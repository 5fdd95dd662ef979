#!filepath: tracktime/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import UnknownClockError
from .observability.clock import ClockSource, MonotonicClock, MillisecondClock, get_clock
from .observability.duration import (
    Duration,
    DurationParts,
    parse,
    format_duration,
    format_total,
    format_milliseconds,
    format_nanoseconds,
    format_seconds,
)
from .observability.stopwatch import Stopwatch, TimerId, TimerKind
from .config.app_config import AppConfig

__version__ = "0.1.0"

# alias 简化调用
TrackTime = Stopwatch

__all__ = [
    "logs", "Logging", "init_logging",
    "UnknownClockError",
    "ClockSource", "MonotonicClock", "MillisecondClock", "get_clock",
    "Duration", "DurationParts", "parse",
    "format_duration", "format_total",
    "format_milliseconds", "format_nanoseconds", "format_seconds",
    "Stopwatch", "TrackTime", "TimerId", "TimerKind",
    "AppConfig",
]
