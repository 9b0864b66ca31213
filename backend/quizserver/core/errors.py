"""Domain exceptions raised by the service layer.

Each exception knows the HTTP status and ``error_code`` it maps to; the
handlers registered in ``quizserver.main`` render them as ``ErrorResponse``.
"""

import enum
from typing import Any


class QuizServerError(Exception):
    """Base class for errors that are reported to the caller."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(QuizServerError):
    """Missing field or malformed input shape."""

    status_code = 400
    error_code = "validation_error"


class NotFoundError(QuizServerError):
    """Id does not resolve, or belongs to someone else."""

    status_code = 404
    error_code = "not_found"


class WindowReason(str, enum.Enum):
    NOT_STARTED = "not_started"
    ENDED = "ended"


class AccessWindowError(QuizServerError):
    """Quiz is outside its availability window."""

    status_code = 403

    def __init__(self, reason: WindowReason, message: str | None = None):
        if message is None:
            message = (
                "Quiz not started yet"
                if reason == WindowReason.NOT_STARTED
                else "Quiz ended"
            )
        super().__init__(message, details={"reason": reason.value})
        self.reason = reason
        self.error_code = f"quiz_{reason.value}"


class StorageError(QuizServerError):
    """Persistence layer failure."""

    status_code = 503
    error_code = "storage_error"
