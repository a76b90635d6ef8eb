"""Structured JSON logging for the ``shadowstamp`` logger hierarchy.

Records are rendered as one JSON object per line carrying the document being
saved (model name and id) and, when a span is active, its OpenTelemetry ids.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict

from opentelemetry import trace

from shadowstamp.logging.filters import document_id_var, model_name_var

ROOT_LOGGER_NAME = "shadowstamp"

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_STANDARD_RECORD_KEYS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter adding document context and trace ids to each line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        model_name = model_name_var.get()
        if model_name is not None:
            entry["model_name"] = model_name
        document_id = document_id_var.get()
        if document_id is not None:
            entry["document_id"] = document_id

        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_KEYS
        )

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            entry["trace_id"] = format(span_context.trace_id, "032x")
            entry["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Send ``shadowstamp`` records to stdout as JSON lines.

    Only the package logger is configured; the application's root logger is
    left alone and ``shadowstamp`` records do not propagate to it.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "shadowstamp_json": {"()": "shadowstamp.logging.logger.CustomJsonFormatter"},
        },
        "filters": {
            "shadowstamp_context": {"()": "shadowstamp.logging.filters.ContextFilter"},
        },
        "handlers": {
            "shadowstamp_console": {
                "class": "logging.StreamHandler",
                "formatter": "shadowstamp_json",
                "filters": ["shadowstamp_context"],
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            ROOT_LOGGER_NAME: {
                "level": level.upper(),
                "handlers": ["shadowstamp_console"],
                "propagate": False,
            },
        },
    })
