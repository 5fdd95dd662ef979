#!filepath: tests/observability/test_timeline.py

from loguru import logger

from tracktime.observability.duration import Duration
from tracktime.observability.timeline_reporter import TimelineReporter


def _capture(fn):
    captured = []
    # 临时添加一个 sink 捕获 Loguru 输出
    sink_id = logger.add(lambda msg: captured.append(str(msg)))
    try:
        fn()
    finally:
        logger.remove(sink_id)
    return "\n".join(captured)


def test_history_log_output():
    history = [
        Duration.build("load", 1_000_000, 1_000_000),
        Duration.build("convert", 2_000_000_000, 2_001_000_000),
    ]
    reporter = TimelineReporter("Demo / job")

    output = _capture(lambda: reporter.print_history(history))

    assert "History for Demo / job" in output
    assert "load" in output
    assert "convert" in output
    assert "2s 1ms" in output


def test_empty_history_reports_zero():
    output = _capture(lambda: TimelineReporter("empty").print_history([]))
    assert "Total" in output
    assert "0ns" in output


def test_timeline_log_output():
    tl = {
        "FTP": Duration.build("stop", 5, 1_230_000_000),
        "Convert": Duration.build("stop", 5, 2_340_000_000),
    }

    output = _capture(lambda: TimelineReporter("2025-11-03").print_timeline(tl))

    assert "Timeline for 2025-11-03" in output
    assert "FTP" in output
    assert "1s 230ms" in output
    assert "3s 570ms" in output


def test_stopwatch_report(make_stopwatch, fake_clock):
    sw = make_stopwatch("Demo")
    sw.start("job")
    fake_clock.advance(1_000_000)
    sw.measure("phase_X", "job")

    with sw.timed("step_A"):
        fake_clock.advance(2_000_000)

    history_out = _capture(lambda: sw.report("job"))
    timeline_out = _capture(sw.report_timeline)

    assert "Demo / job" in history_out
    assert "phase_X" in history_out
    assert "step_A" in timeline_out
    assert "2ms" in timeline_out
