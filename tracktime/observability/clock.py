#!filepath: tracktime/observability/clock.py
from __future__ import annotations

import time
from typing import Dict, Optional, Protocol, Type, Union

from tracktime.utils.errors import UnknownClockError

NS_PER_MS = 1_000_000


class ClockSource(Protocol):
    """
    时间源协议（由 Stopwatch 在构造时注入）
    - now()                 → 不透明、可比较的 time-point
    - delta_ns(start, end)  → 有符号整数纳秒；end 省略时取当前时刻
    """

    def now(self) -> int:
        ...

    def delta_ns(self, start: int, end: Optional[int] = None) -> int:
        ...


class MonotonicClock:
    """高精度单调时钟，time-point 即 perf_counter_ns()"""

    name = "monotonic"

    def now(self) -> int:
        return time.perf_counter_ns()

    def delta_ns(self, start: int, end: Optional[int] = None) -> int:
        if end is None:
            end = self.now()
        return end - start


class MillisecondClock:
    """
    毫秒精度的降级时钟（墙上时间，整数毫秒）。
    elapsed 仍以纳秒返回，只是粒度为 1ms。
    """

    name = "millisecond"

    def now(self) -> int:
        return time.time_ns() // NS_PER_MS

    def delta_ns(self, start: int, end: Optional[int] = None) -> int:
        if end is None:
            end = self.now()
        return (end - start) * NS_PER_MS


CLOCKS: Dict[str, Type] = {
    MonotonicClock.name: MonotonicClock,
    MillisecondClock.name: MillisecondClock,
}


def get_clock(clock: Union[str, ClockSource, None] = None) -> ClockSource:
    """
    按名称创建时钟；已是时钟对象则原样返回，None 取默认 monotonic。
    """
    if clock is None:
        return MonotonicClock()

    if not isinstance(clock, str):
        return clock

    key = clock.strip().lower()
    if key not in CLOCKS:
        raise UnknownClockError(
            f"Unknown clock source: {clock!r} (available: {', '.join(sorted(CLOCKS))})"
        )
    return CLOCKS[key]()
