"""Custom exception classes for the feedback alert server."""

from typing import Optional, Dict, Any


class FeedbackServiceError(Exception):
    """Base exception for request-level errors.

    Each subclass carries the HTTP status it maps to. The app-level handler
    renders ``{"success": false, "message": ..., **details}``.
    """

    ERROR_CODE = "FEEDBACK_001"
    STATUS_CODE = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize exception with message, code, and optional details.

        Args:
            message: Short human-readable error message
            error_code: Optional error code override
            details: Optional extra fields merged into the error response body
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.ERROR_CODE
        self.details = details or {}


class ValidationError(FeedbackServiceError):
    """Raised when a required field is missing or the body is malformed."""

    ERROR_CODE = "VALIDATION_001"
    STATUS_CODE = 400


class AuthError(FeedbackServiceError):
    """Raised on bad admin credentials or a missing/unknown bearer token."""

    ERROR_CODE = "AUTH_001"
    STATUS_CODE = 401


class StorageError(FeedbackServiceError):
    """Raised when the feedback file cannot be read or written."""

    ERROR_CODE = "STORAGE_001"
    STATUS_CODE = 500


class MailError(FeedbackServiceError):
    """Raised when sending the alert email fails."""

    ERROR_CODE = "MAIL_001"
    STATUS_CODE = 500
