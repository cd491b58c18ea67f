"""Application exception hierarchy.

Every error leaves the API as a fixed-shape body: ``{"error": "<message>"}``.
"""

from typing import Any
from uuid import UUID

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception.

    All custom exceptions should inherit from this class.
    ``extra`` is merged into the response body next to ``error``.
    """

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.extra = extra or {}

        super().__init__(status_code=status_code, detail=message)

    def to_body(self) -> dict[str, Any]:
        """Build the JSON response body."""
        return {"error": self.message, **self.extra}


# ============================================================================
# Authentication & Authorization Exceptions (401, 403)
# ============================================================================


class AuthenticationError(AppException):
    """User is not authenticated."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="authentication_required",
            message=message,
        )


class InvalidCredentialsError(AppException):
    """Invalid login credentials."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="invalid_credentials",
            message=message,
        )


class TokenExpiredError(AppException):
    """JWT token has expired."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="token_expired",
            message=message,
        )


class InvalidTokenError(AppException):
    """JWT token is invalid."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="invalid_token",
            message=message,
        )


class InsufficientRoleError(AppException):
    """Authenticated user lacks the required role."""

    def __init__(
        self,
        message: str = "Forbidden",
        required_role: str | None = None,
    ) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="insufficient_role",
            message=message,
        )
        self.required_role = required_role


# ============================================================================
# Resource Exceptions (404, 409)
# ============================================================================


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(
        self,
        resource: str,
        identifier: str | UUID | None = None,
    ) -> None:
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id '{identifier}' not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="not_found",
            message=message,
        )
        self.resource = resource


# ============================================================================
# Validation Exceptions (400)
# ============================================================================


class ValidationError(AppException):
    """Request validation error, reported field by field."""

    def __init__(
        self,
        message: str = "Validation failed",
        fields: dict[str, str] | None = None,
    ) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="validation_error",
            message=message,
            extra={"fields": fields or {}},
        )


class InvalidLocaleError(AppException):
    """Invalid or unsupported locale on a public API call."""

    def __init__(self, locale: str) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="invalid_locale",
            message="Invalid locale",
        )
        self.locale = locale


# ============================================================================
# Asset Exceptions
# ============================================================================


class InvalidFileTypeError(AppException):
    """Uploaded file type is not allowed for the category."""

    def __init__(self, content_type: str | None, allowed: list[str]) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="invalid_file_type",
            message=(
                f"Invalid file type: {content_type}. "
                f"Allowed types: {', '.join(allowed)}"
            ),
        )
        self.content_type = content_type


class FileTooLargeError(AppException):
    """Uploaded file exceeds the category ceiling."""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="file_too_large",
            message=(
                f"File too large: {size / (1024 * 1024):.1f}MB. "
                f"Maximum size: {max_size / (1024 * 1024):.0f}MB"
            ),
        )
        self.size = size
        self.max_size = max_size


class UploadFailedError(AppException):
    """Storage provider failed to store the file or produce its URL."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="upload_failed",
            message=f"Upload failed: {detail}",
        )


# ============================================================================
# Rate Limiting Exceptions (429)
# ============================================================================


class RateLimitExceededError(AppException):
    """Too many requests."""

    def __init__(self, retry_after: int) -> None:
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            error_code="rate_limit_exceeded",
            message=f"Rate limit exceeded. Try again in {retry_after} seconds.",
        )
        self.retry_after = retry_after
