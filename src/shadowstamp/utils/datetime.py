"""DateTime utilities for shadow field stamping."""

from datetime import datetime, timezone


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)
