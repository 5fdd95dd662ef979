#!filepath: tests/base_test/test_logger.py
import pytest
from loguru import logger

from tracktime.config.log_config import LogConfig
from tracktime.utils.logger import Logging, init_logging


def _capture():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))
    return captured, sink_id


def test_default_logging_creates_no_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    log = Logging()

    assert log.configured is False
    assert list(tmp_path.iterdir()) == []


def test_configure_requires_dir():
    with pytest.raises(ValueError):
        Logging().configure()


def test_init_logging_writes_file(tmp_path):
    cfg = LogConfig(dir=str(tmp_path / "logs"), level="DEBUG")

    log = init_logging(cfg)
    log.info("hello file")
    logger.complete()

    assert log.configured is True
    files = list((tmp_path / "logs").glob("*.log"))
    assert files
    logger.remove()


def test_catch_logs_and_reraises():
    log = Logging()
    captured, sink_id = _capture()

    @log.catch(msg="boom")
    def fail():
        raise KeyError("x")

    with pytest.raises(KeyError):
        fail()

    logger.remove(sink_id)
    assert any("[ERROR] fail: boom" in line for line in captured)


def test_catch_logs_time_and_outputs():
    log = Logging()
    captured, sink_id = _capture()

    @log.catch(log_inputs=True, log_outputs=True)
    def add(a, b=0):
        return a + b

    assert add(1, b=2) == 3

    logger.remove(sink_id)
    output = "\n".join(captured)
    assert "[CALL] add" in output
    assert "[RETURN] add result=3" in output
    assert "[TIME] add took" in output
