"""
Custom exception hierarchy for proper error categorization and HTTP status mapping.

Distinguishes:
- User errors (400-level): Client sent bad input or acted on missing state
- External errors (502): The analysis agent sent unusable data

Usage:
    from analysis_pro.core.exceptions import SessionBusyError, MalformedDataError

    raise SessionBusyError("Analysis already in progress")
    raise MalformedDataError("Duplicate symbol in ranked_investments", symbol="TCS")
"""

from typing import Any


class AppError(Exception):
    """
    Base application error with HTTP status mapping.

    All custom exceptions inherit from this to enable consistent error handling.
    """

    # Default status code (subclasses override)
    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str, **context: Any):
        """
        Initialize error with message and optional context.

        Args:
            message: Human-readable error description
            **context: Additional key-value pairs for logging (e.g., symbol, page)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON response and structured logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "status_code": self.status_code,
            **self.context,
        }


# ===== 400-level: Client Errors =====


class ValidationError(AppError):
    """User provided invalid input (e.g., blank message, page size below 1)."""

    status_code = 400
    error_type = "validation_error"


class NotFoundError(AppError):
    """Requested resource does not exist (e.g., no analysis to export yet)."""

    status_code = 404
    error_type = "not_found_error"


class SessionBusyError(AppError):
    """
    A message was submitted while another agent request is still in flight.

    Overlapping requests are rejected rather than queued, so responses can
    never be applied out of order.
    """

    status_code = 409
    error_type = "session_busy_error"


# ===== 502: External Service Errors =====


class MalformedDataError(AppError):
    """
    Agent answered, but the payload does not match the wire contract.

    Examples:
        - status "success" without a result object
        - ranked_investments with duplicate symbols
    """

    status_code = 502
    error_type = "malformed_data_error"
