# tests/conftest.py
from __future__ import annotations

from typing import List, Optional

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


class FakeClock:
    """
    可脚本化的时钟：time-point 为整数纳秒，只有 advance() 才会前进。
    reads 记录每次 now() 的返回值，便于断言读取次数。
    """

    def __init__(self, start: int = 0):
        self.current = start
        self.reads: List[int] = []

    def advance(self, ns: int) -> None:
        self.current += ns

    def now(self) -> int:
        self.reads.append(self.current)
        return self.current

    def delta_ns(self, start: int, end: Optional[int] = None) -> int:
        if end is None:
            end = self.now()
        return end - start


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_stopwatch(fake_clock):
    """
    Factory fixture: Stopwatch wired to the shared fake clock.
    """
    from tracktime.observability.stopwatch import Stopwatch

    def _make(name: str = "Demo Stopwatch", **kwargs) -> Stopwatch:
        return Stopwatch(name, clock=fake_clock, **kwargs)

    return _make
