#!filepath: tracktime/observability/timeline_reporter.py
from typing import Dict, Sequence

from tracktime import logs
from tracktime.observability.duration import Duration, format_parts, parse


class TimelineReporter:
    """
    计时报告（冷路径，只写日志）：
    - print_history() : 单个计时器的 history，每行 label → elapsed / total
    - print_timeline(): timed() 记录的 name → Duration
    """

    def __init__(self, title: str):
        self.title = title

    def print_history(self, history: Sequence[Duration]):
        logs.info(f"[Timeline] ===== History for {self.title} =====")

        for record in history:
            label = str(record.label)
            logs.info(
                f"[Timeline] {label:<30} {record.display or '0ns':>20}"
                f" | total {record.display_total or '0ns'}"
            )

        total_ns = history[-1].total_ns if history else 0
        logs.info(f"[Timeline] Total{'':<26} {format_parts(parse(total_ns)) or '0ns':>20}")
        logs.info("[Timeline] ===========================================")

    def print_timeline(self, timeline: Dict[str, Duration]):
        logs.info(f"[Timeline] ===== Timeline for {self.title} =====")

        total_ns = 0
        for name, record in timeline.items():
            name_str = str(name)
            logs.info(f"[Timeline] {name_str:<30} {record.display_total or '0ns':>20}")
            total_ns += record.total_ns

        logs.info(f"[Timeline] Total{'':<26} {format_parts(parse(total_ns)) or '0ns':>20}")
        logs.info("[Timeline] ===========================================")
