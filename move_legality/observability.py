"""Structured logging and in-process check metrics for move_legality."""
from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from .config import build_settings
from .errors import InputValidationError, sanitize_context

__all__ = [
    "configure_logging",
    "get_logger",
    "MetricsRegistry",
    "metrics",
    "generate_trace_id",
]


_RECORD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}
# Lifted out of ``context`` so a check's log lines can be joined on them.
_TOP_LEVEL_KEYS = ("event", "trace_id")
_LOGGER_NAME = "move_legality"
_CONFIGURED = False
_LOCK = threading.Lock()


class StructuredLogFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": "log",
            "message": record.getMessage(),
        }
        context: Dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            if key in _TOP_LEVEL_KEYS:
                if value:
                    payload[key] = value
            else:
                context[key] = value
        if context:
            payload["context"] = sanitize_context(context)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


def _settings_level() -> tuple[int, InputValidationError | None]:
    try:
        return build_settings().numeric_log_level, None
    except InputValidationError as exc:
        return logging.INFO, exc


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach the JSON handler once and return the package logger.

    Without an explicit ``level`` the configured level is used; an invalid
    configured level falls back to INFO and is reported as a warning.
    """

    global _CONFIGURED
    problem: InputValidationError | None = None
    with _LOCK:
        logger = logging.getLogger(_LOGGER_NAME)
        if not _CONFIGURED:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredLogFormatter())
            logger.addHandler(handler)
            logger.propagate = False
            _CONFIGURED = True
        if level is not None:
            logger.setLevel(level if isinstance(level, int) else level.upper())
        elif logger.level == logging.NOTSET:
            resolved, problem = _settings_level()
            logger.setLevel(resolved)
    if problem is not None:
        logger.warning(
            "invalid_log_level",
            extra={"event": "invalid_log_level", "error": problem.to_payload()},
        )
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``name`` as a child of the package logger."""

    configure_logging()
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


class MetricsRegistry:
    """Counters, gauges and running totals for observed durations.

    Durations keep only a count and a sum, so memory does not grow with the
    number of checks.
    """

    def __init__(self) -> None:
        self._counters: Dict[str, float] = {}
        self._gauges: Dict[str, float] = {}
        self._durations: Dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def increment(self, name: str, amount: float = 1.0) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0.0) + amount

    def set_gauge(self, name: str, value: float) -> None:
        with self._lock:
            self._gauges[name] = float(value)

    def observe(self, name: str, seconds: float) -> None:
        with self._lock:
            totals = self._durations.setdefault(name, [0.0, 0.0])
            totals[0] += 1
            totals[1] += seconds

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "gauges": dict(self._gauges),
                "durations": {
                    name: {"count": int(count), "total_seconds": total}
                    for name, (count, total) in self._durations.items()
                },
            }


# Shared by every check in the process: move_legality_checks_total,
# move_legality_unresolved_slots_total, move_legality_check_duration_seconds
# and the move_legality_tables_loaded gauge.
metrics = MetricsRegistry()


def generate_trace_id() -> str:
    """Return a short identifier correlating the log lines of one check."""

    return uuid.uuid4().hex[:12]
