"""Logging infrastructure for shadowstamp.

This module provides structured logging with JSON output, document context
tracking, and OpenTelemetry trace correlation.
"""

from shadowstamp.logging.filters import ContextFilter, clear_document_context, document_context, set_document_context
from shadowstamp.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "document_context",
    "set_document_context",
    "clear_document_context",
]
