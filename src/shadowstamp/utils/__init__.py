"""Utility functions and helpers for shadowstamp."""

from shadowstamp.utils.datetime import get_current_timestamp
from shadowstamp.utils.decorators import traced

__all__ = [
    "get_current_timestamp",
    "traced",
]
