#!filepath: tracktime/observability/stopwatch.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from tracktime import logs
from tracktime.observability.clock import ClockSource, get_clock
from tracktime.observability.duration import Duration, DurationParts, parse
from tracktime.observability.timeline_reporter import TimelineReporter

DEFAULT_NAME = "Unknown TrackTime"
DEFAULT_DESCRIPTOR = "System Default"


class TimerKind(Enum):
    DEFAULT = "default"
    NAMED = "named"


@dataclass(frozen=True)
class TimerId:
    """
    计时器身份：默认计时器与命名计时器用 kind 区分，
    默认计时器 name 恒为 None，不会与任何字符串名字冲突。
    """

    kind: TimerKind
    name: Optional[str] = None

    @classmethod
    def resolve(cls, name: Any = None) -> "TimerId":
        # None / "" 等一律视为默认计时器
        if not name:
            return DEFAULT_TIMER
        return cls(TimerKind.NAMED, str(name))

    @property
    def is_default(self) -> bool:
        return self.kind is TimerKind.DEFAULT

    @property
    def descriptor(self) -> str:
        return DEFAULT_DESCRIPTOR if self.is_default else str(self.name)


DEFAULT_TIMER = TimerId(TimerKind.DEFAULT)


@dataclass
class TimerState:
    base: Any
    history: List[Duration] = field(default_factory=list)


class Stopwatch:
    """
    一组独立命名的计时器（像秒表上的多次 lap）

    - start(name)            创建/重置计时器
    - measure(label, name)   记录距上一次 measure 的耗时（elapsed），并累加 total
    - stop(name)             最后一次 measure("stop")，然后丢弃计时器
    - history / history_label 查询历史

    默认计时器在构造时创建，只能被重置，不能被删除。
    非线程安全：多线程请每个线程一个实例，或在外部加锁。
    """

    def __init__(
        self,
        name: Optional[str] = None,
        *,
        clock: Union[str, ClockSource, None] = None,
        clamp_negative: bool = True,
    ):
        self._name = name or DEFAULT_NAME
        self._clock = get_clock(clock)
        self.clamp_negative = clamp_negative
        self._timers: Dict[TimerId, TimerState] = {}

        # timeline: OrderedDict[timer descriptor, final Duration]，由 timed() 写入
        self.timeline: Dict[str, Duration] = OrderedDict()

        self.start()

    @classmethod
    def from_config(cls, config) -> "Stopwatch":
        return cls(config.name, clock=config.clock, clamp_negative=config.clamp_negative)

    # ---------------------------------------------------------
    # 只读属性
    # ---------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def clock(self) -> ClockSource:
        return self._clock

    @property
    def timers(self) -> List[str]:
        """Names of the active timers, without the default timer."""
        return [timer_id.name for timer_id in self._timers if not timer_id.is_default]

    def __contains__(self, name: Any) -> bool:
        return TimerId.resolve(name) in self._timers

    def __len__(self) -> int:
        return len(self.timers)

    def __repr__(self) -> str:
        return f"Stopwatch(name={self._name!r}, timers={self.timers!r})"

    # ---------------------------------------------------------
    # 生命周期
    # ---------------------------------------------------------
    def start(self, name: Optional[str] = None) -> None:
        timer_id = TimerId.resolve(name)
        self._timers[timer_id] = TimerState(base=self._clock.now())
        logs.debug(f"[Stopwatch] {self._name}: start {timer_id.descriptor}")

    def remove(self, name: Optional[str] = None) -> None:
        timer_id = TimerId.resolve(name)

        if timer_id.is_default:
            self.start()
            return

        if timer_id in self._timers:
            del self._timers[timer_id]
            logs.debug(f"[Stopwatch] {self._name}: removed {timer_id.descriptor}")

    def stop(self, name: Optional[str] = None) -> Optional[Duration]:
        result = self.measure("stop", name)
        if result is None:
            return None

        self.remove(name)
        logs.debug(f"[Stopwatch] {self._name}: stop {result.label} total={result.display_total}")
        return result

    # ---------------------------------------------------------
    # 测量
    # ---------------------------------------------------------
    def measure(self, label: Optional[str] = None, name: Optional[str] = None) -> Optional[Duration]:
        """
        Record the time elapsed since the previous measurement (or since start).

        Returns None when the timer does not exist.
        """
        timer_id = TimerId.resolve(name)
        state = self._timers.get(timer_id)
        if state is None:
            return None

        timestamp = datetime.now(timezone.utc)

        elapsed_ns = int(self._clock.delta_ns(state.base))
        # 重新读取时钟作为下一段的起点，保证相邻 measure 区间不重叠
        state.base = self._clock.now()

        if elapsed_ns < 0:
            logs.warning(
                f"[Stopwatch] {self._name}: clock went backwards by {-elapsed_ns}ns "
                f"on {timer_id.descriptor}"
            )
            if self.clamp_negative:
                elapsed_ns = 0

        previous_total = state.history[-1].total_ns if state.history else 0

        if not label:
            label = f"{timer_id.descriptor} measurement {len(state.history) + 1}"

        record = Duration.build(
            label=str(label),
            elapsed_ns=elapsed_ns,
            total_ns=previous_total + elapsed_ns,
            timestamp=timestamp,
            timer_name=timer_id.name,
        )
        state.history.append(record)
        return record

    def duration(self, name: Optional[str] = None, include_current_time: bool = True) -> Optional[Duration]:
        """
        Total time since the timer was started.

        With ``include_current_time`` a measurement is recorded first, otherwise
        the total ends at the last measurement. The returned record is not
        added to the history.
        """
        timer_id = TimerId.resolve(name)
        state = self._timers.get(timer_id)
        if state is None:
            return None

        if include_current_time:
            self.measure(None, name)

        total_ns = state.history[-1].total_ns if state.history else 0
        return Duration.build(
            label=f"{timer_id.name or ''} total".strip(),
            elapsed_ns=total_ns,
            total_ns=total_ns,
            timestamp=datetime.now(timezone.utc),
            timer_name=timer_id.name,
        )

    @contextmanager
    def timed(self, name: str, *, record: bool = True) -> Iterator["Stopwatch"]:
        """
        Context-manager timer: start on enter, stop on exit.

        record=True 时把最终 Duration 写入 timeline。
        """
        self.start(name)
        try:
            yield self
        finally:
            result = self.stop(name)
            if record and result is not None:
                self.timeline[TimerId.resolve(name).descriptor] = result

    # ---------------------------------------------------------
    # 历史
    # ---------------------------------------------------------
    def history(self, name: Optional[str] = None) -> List[Duration]:
        state = self._timers.get(TimerId.resolve(name))
        return [] if state is None else list(state.history)

    def history_label(self, label: Optional[str], name: Optional[str] = None) -> Optional[Duration]:
        """First measurement whose label matches (case-insensitive, trimmed)."""
        if label is None:
            return None

        needle = str(label).strip().lower()
        if not needle:
            return None

        state = self._timers.get(TimerId.resolve(name))
        if state is None:
            return None

        for record in state.history:
            if record.label.strip().lower() == needle:
                return record
        return None

    @staticmethod
    def parse(total_ns: int) -> DurationParts:
        return parse(total_ns)

    # ---------------------------------------------------------
    # 报告（冷路径）
    # ---------------------------------------------------------
    def report(self, name: Optional[str] = None) -> None:
        timer_id = TimerId.resolve(name)
        TimelineReporter(f"{self._name} / {timer_id.descriptor}").print_history(self.history(name))

    def report_timeline(self) -> None:
        TimelineReporter(self._name).print_timeline(self.timeline)
