import json
import logging
import sys

import pytest

from api.core.logging import setup_logging
from config import AppSettings
from utils.logging import JsonFormatter, log_execution_time


def _record(msg="hello", exc_info=None):
    return logging.LogRecord("posture.tracker", logging.INFO, __file__, 10, msg, None, exc_info)


def test_json_formatter_fields():
    data = json.loads(JsonFormatter().format(_record()))
    assert data["level"] == "INFO"
    assert data["name"] == "posture.tracker"
    assert data["message"] == "hello"
    assert "exception" not in data


def test_json_formatter_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    data = json.loads(JsonFormatter().format(record))
    assert data["exception"] == {"type": "ValueError", "message": "boom"}


def test_log_execution_time(caplog):
    logger = logging.getLogger("utils.test")

    @log_execution_time(logger, level=logging.INFO)
    def work(x):
        return x * 2

    with caplog.at_level(logging.INFO, logger="utils.test"):
        assert work(21) == 42
    assert "work executed in" in caplog.text


def test_log_execution_time_reraises():
    @log_execution_time(logging.getLogger("utils.test"))
    def fail():
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        fail()


def test_setup_logging_levels(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    setup_logging(AppSettings(LOG_LEVEL="debug", LOG_FILE=str(log_file), JSON_LOGS=True))
    assert logging.getLogger("posture").level == logging.DEBUG
    assert log_file.exists()
    setup_logging(AppSettings())
