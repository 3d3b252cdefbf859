"""Logging configuration for memgate.

Log output goes to stderr (and optionally a file) so that CLI results on
stdout stay machine-readable. Gate decisions are logged with
``extra={"decision": decision.to_dict()}``; the JSON formatter emits them as
a nested object, the text formatter as a short suffix.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .settings import Settings

ROOT_LOGGER = "memgate"

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s%(decision_suffix)s"


def _decision_of(record: logging.LogRecord) -> dict[str, Any] | None:
    return getattr(record, "decision", None)


class TextFormatter(logging.Formatter):
    """Plain text lines, with ``reason/rule`` appended for gate decisions."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT, datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        decision = _decision_of(record)
        record.decision_suffix = (
            f" <{decision['reason']}/{decision['matched_rule'] or '-'}>" if decision else ""
        )
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Keys: ``ts``, ``level``, ``logger``, ``message``, plus ``decision`` for
    gate decisions and ``exception`` when the record carries exc_info.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        decision = _decision_of(record)
        if decision:
            entry["decision"] = decision

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False)


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the ``memgate`` logger from settings.

    Safe to call repeatedly: existing handlers are replaced, not stacked.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(settings.log_level)
    logger.handlers.clear()

    formatter: logging.Formatter = JSONFormatter() if settings.log_json else TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
