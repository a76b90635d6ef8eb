"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
so every line emitted while a document is being saved can be traced back to
its model and identifier.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

from shadowstamp.__version__ import __version__

model_name_var: ContextVar[Optional[str]] = ContextVar("model_name", default=None)
document_id_var: ContextVar[Optional[str]] = ContextVar("document_id", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "model_name", model_name_var.get())
        setattr(record, "document_id", document_id_var.get())
        setattr(record, "sdk_name", "shadowstamp")
        setattr(record, "sdk_version", __version__)

        return True


def set_document_context(
    model_name: Optional[str] = None,
    document_id: Optional[Any] = None,
) -> None:
    """Set document context variables."""
    if model_name is not None:
        model_name_var.set(model_name)
    if document_id is not None:
        document_id_var.set(str(document_id))


def clear_document_context() -> None:
    """Clear all document context variables."""
    model_name_var.set(None)
    document_id_var.set(None)


@contextmanager
def document_context(model_name: Optional[str], document_id: Optional[Any]) -> Iterator[None]:
    """Scope the document context variables to a block, restoring them afterwards."""
    model_token = model_name_var.set(model_name)
    document_token = document_id_var.set(None if document_id is None else str(document_id))
    try:
        yield
    finally:
        document_id_var.reset(document_token)
        model_name_var.reset(model_token)
