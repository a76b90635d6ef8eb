from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for shadowstamp operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has a specific number range for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors (1xxx)
        VALIDATION_*: Value validation errors (2xxx)
        SCHEMA_*: Schema definition errors (3xxx)
        DOCUMENT_*: Document lifecycle errors (4xxx)
    """
    # Configuration errors (1xxx)
    CONFIG_INVALID = "CONFIG_001"
    UNKNOWN_OPTION = "CONFIG_002"

    # Validation errors (2xxx)
    VALIDATION_ERROR = "VALIDATION_001"

    # Schema errors (3xxx)
    SCHEMA_ERROR = "SCHEMA_001"
    PATH_NOT_FOUND = "SCHEMA_002"
    DUPLICATE_PATH = "SCHEMA_003"

    # Document errors (4xxx)
    DOCUMENT_ERROR = "DOCUMENT_001"


class ShadowStampError(Exception):
    """Base exception for all shadowstamp-related errors.

    A single exception class categorized by error codes instead of a
    hierarchy of specific exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DOCUMENT_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize shadowstamp error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from shadowstamp.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "ShadowStampError":
        """Create exception from error code.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for ShadowStampError

        Returns:
            ShadowStampError instance
        """
        return cls(message=message, error_code=error_code, **kwargs)


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> ShadowStampError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        ShadowStampError with CONFIG_INVALID code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return ShadowStampError(
        message=message,
        error_code=kwargs.pop('error_code', ErrorCode.CONFIG_INVALID),
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> ShadowStampError:
    """Create a validation error.

    Args:
        message: Error message
        field: Field that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        ShadowStampError with VALIDATION_ERROR code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return ShadowStampError(
        message=message,
        error_code=ErrorCode.VALIDATION_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def path_not_found_error(
    path: str,
    model_name: Optional[str] = None,
    **kwargs
) -> ShadowStampError:
    """Create an error for a path the schema does not declare.

    Args:
        path: The unknown path
        model_name: Model the lookup was made against

    Returns:
        ShadowStampError with PATH_NOT_FOUND code
    """
    details = {"path": path}
    if model_name:
        details["model_name"] = model_name

    where = f" on model '{model_name}'" if model_name else ""
    return ShadowStampError(
        message=f"Path '{path}' is not declared in the schema{where}",
        error_code=ErrorCode.PATH_NOT_FOUND,
        details=details,
        **kwargs
    )
