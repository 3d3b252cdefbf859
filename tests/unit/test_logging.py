"""Unit tests for logging configuration."""

import json
import logging
import sys

import pytest

from memgate.config.logging import JSONFormatter, TextFormatter, setup_logging
from memgate.config.settings import load_settings
from memgate.core.services.query_gate import QueryGate

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def reset_memgate_logger():
    yield
    logger = logging.getLogger("memgate")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def _record(msg, args=None, exc_info=None, **extra):
    record = logging.LogRecord(
        "memgate.core.services.query_gate", logging.DEBUG, "query_gate.py", 42, msg, args, exc_info
    )
    record.__dict__.update(extra)
    return record


def test_setup_logging_replaces_handlers():
    setup_logging(load_settings(log_level="DEBUG"))
    logger = setup_logging(load_settings(log_level="WARNING"))

    assert logger.name == "memgate"
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, TextFormatter)


def test_setup_logging_json_to_file(tmp_path):
    log_file = tmp_path / "logs" / "memgate.log"
    logger = setup_logging(load_settings(log_json=True, log_file=log_file))

    logger.info("gate ready")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    payload = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert payload["message"] == "gate ready"
    assert payload["logger"] == "memgate"


def test_json_formatter_plain_record():
    payload = json.loads(JSONFormatter().format(_record("Loaded %s", ("你记得吗",))))

    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "memgate.core.services.query_gate"
    assert payload["message"] == "Loaded 你记得吗"
    assert payload["ts"].endswith("+00:00")
    assert "decision" not in payload
    assert "exception" not in payload


def test_json_formatter_nests_decision():
    decision = QueryGate().explain("rm -rf /tmp").to_dict()

    payload = json.loads(JSONFormatter().format(_record("Retrieval skipped", decision=decision)))

    assert payload["decision"] == decision
    assert payload["decision"]["risk"] is True


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record("failed", exc_info=sys.exc_info())

    payload = json.loads(JSONFormatter().format(record))

    assert payload["exception"]["type"] == "ValueError"
    assert payload["exception"]["message"] == "boom"
    assert "ValueError: boom" in payload["exception"]["traceback"]


def test_text_formatter_suffixes_decision():
    decision = QueryGate().explain("hi there").to_dict()

    line = TextFormatter().format(_record("Retrieval skipped", decision=decision))

    assert line.endswith("[memgate.core.services.query_gate] Retrieval skipped <skip_pattern/greeting>")


def test_text_formatter_without_decision():
    line = TextFormatter().format(_record("gate ready"))
    assert line.endswith("gate ready")


def test_gate_logs_decisions_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="memgate"):
        QueryGate().explain("ok")

    record = caplog.records[-1]
    assert record.getMessage() == "Retrieval skipped"
    assert record.decision["reason"] == "too_short"


def test_gate_skips_decision_logging_above_debug(caplog):
    with caplog.at_level(logging.INFO, logger="memgate"):
        QueryGate().explain("remember my name")

    assert not [r for r in caplog.records if hasattr(r, "decision")]
