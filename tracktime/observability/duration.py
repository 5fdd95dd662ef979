#!filepath: tracktime/observability/duration.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, NamedTuple, Optional

NS_PER_SECOND = 1_000_000_000
NS_PER_MS = 1_000_000


class DurationParts(NamedTuple):
    seconds: int
    milliseconds: int
    nanoseconds: int


def parse(total_ns: int) -> DurationParts:
    """
    纳秒 → (seconds, milliseconds, nanoseconds)

    整数 floor-division，任意大小都不丢精度：
        n == seconds * 1e9 + milliseconds * 1e6 + nanoseconds
        0 <= milliseconds < 1000, 0 <= nanoseconds < 1e6

    负数同样满足上式：符号只体现在 seconds 上
    (例如 -1ns → (-1, 999, 999999))。
    """
    total_ns = int(total_ns)
    seconds, rest = divmod(total_ns, NS_PER_SECOND)
    milliseconds, nanoseconds = divmod(rest, NS_PER_MS)
    return DurationParts(seconds, milliseconds, nanoseconds)


def format_parts(parts: DurationParts) -> str:
    """Skip zero components, e.g. ``1s 5ns``; all zero gives ``""``."""
    segments = []
    if parts.seconds != 0:
        segments.append(f"{parts.seconds}s")
    if parts.milliseconds != 0:
        segments.append(f"{parts.milliseconds}ms")
    if parts.nanoseconds != 0:
        segments.append(f"{parts.nanoseconds}ns")
    return " ".join(segments).strip()


def _scaled(ns: int, exponent: int) -> str:
    return format(Decimal(ns).scaleb(exponent), "f")


@dataclass(frozen=True)
class Duration:
    """
    一次测量的结果（不可变）

    - elapsed_ns : 距上一次 measure（或 start）的纳秒数
    - total_ns   : 计时器启动以来的累计纳秒数
    - seconds / milliseconds / nanoseconds : elapsed_ns 的分解
    - timer_name : None 表示默认计时器
    """

    label: str
    elapsed_ns: int
    total_ns: int
    seconds: int
    milliseconds: int
    nanoseconds: int
    timestamp: Optional[datetime] = None
    timer_name: Optional[str] = None

    @classmethod
    def build(
        cls,
        label: str,
        elapsed_ns: int,
        total_ns: int,
        timestamp: Optional[datetime] = None,
        timer_name: Optional[str] = None,
    ) -> "Duration":
        parts = parse(elapsed_ns)
        return cls(
            label=label,
            elapsed_ns=elapsed_ns,
            total_ns=total_ns,
            seconds=parts.seconds,
            milliseconds=parts.milliseconds,
            nanoseconds=parts.nanoseconds,
            timestamp=timestamp,
            timer_name=timer_name,
        )

    # ---------------------------------------------------------
    # 派生字段：访问时计算，不存储
    # ---------------------------------------------------------
    @property
    def parts(self) -> DurationParts:
        return DurationParts(self.seconds, self.milliseconds, self.nanoseconds)

    @property
    def display(self) -> str:
        return format_duration(self)

    @property
    def display_total(self) -> str:
        return format_total(self)

    @property
    def display_ms(self) -> str:
        return format_milliseconds(self)

    @property
    def display_ns(self) -> str:
        return format_nanoseconds(self)

    @property
    def display_seconds(self) -> str:
        return format_seconds(self)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "timer": self.timer_name,
            "label": self.label,
            "elapsed_ns": self.elapsed_ns,
            "total_ns": self.total_ns,
            "seconds": self.seconds,
            "milliseconds": self.milliseconds,
            "nanoseconds": self.nanoseconds,
            "display": self.display,
            "display_total": self.display_total,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


def format_duration(record: Duration) -> str:
    return format_parts(record.parts)


def format_total(record: Duration) -> str:
    return format_parts(parse(record.total_ns))


def format_milliseconds(record: Duration) -> str:
    return f"{_scaled(record.elapsed_ns, -6)}ms"


def format_nanoseconds(record: Duration) -> str:
    return f"{record.elapsed_ns}ns"


def format_seconds(record: Duration) -> str:
    return f"{_scaled(record.elapsed_ns, -9)}s"
