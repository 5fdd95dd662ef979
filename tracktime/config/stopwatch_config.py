#!filepath: tracktime/config/stopwatch_config.py
from pydantic import BaseModel, field_validator

from tracktime.observability.clock import CLOCKS
from tracktime.utils.errors import UnknownClockError


class StopwatchConfig(BaseModel):
    name: str = "Unknown TrackTime"
    clock: str = "monotonic"
    clamp_negative: bool = True

    @field_validator("clock")
    @classmethod
    def _known_clock(cls, value: str) -> str:
        key = value.strip().lower()
        if key not in CLOCKS:
            raise UnknownClockError(f"Unknown clock source: {value!r}")
        return key
