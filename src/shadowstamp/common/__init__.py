"""Common building blocks shared across shadowstamp."""

from shadowstamp.common.exceptions import (
    ErrorCode,
    ShadowStampError,
    configuration_error,
    path_not_found_error,
    validation_error,
)

__all__ = [
    "ErrorCode",
    "ShadowStampError",
    "configuration_error",
    "validation_error",
    "path_not_found_error",
]
