"""Reference document host: an in-memory schema with hook slots and
change-tracking documents. No persistence; ``save`` only runs hooks and
resets tracking."""

from shadowstamp.documents.document import Document, model
from shadowstamp.documents.schema import Schema

__all__ = [
    "Schema",
    "Document",
    "model",
]
