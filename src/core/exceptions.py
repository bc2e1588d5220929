"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"
    EMAIL_TAKEN = "EMAIL_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INFRASTRUCTURE_ERROR = "INFRASTRUCTURE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class InvalidCredentialsError(AuthenticationError):
    """Login unknown or password mismatch.

    The message is identical for both causes so callers cannot probe for
    existing logins.
    """

    def __init__(self) -> None:
        super().__init__(
            message="Invalid login or password",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ForbiddenError(AuthorizationError):
    """Caller does not own the target account."""

    def __init__(self) -> None:
        super().__init__("You don't have permission to access this resource.")


class AccountNotFoundError(AppException):
    """Account (profile or credential) not found."""

    def __init__(self, account_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ACCOUNT_NOT_FOUND,
            message=f"Account not found: {account_id}",
            status_code=404,
            details={"account_id": account_id},
        )


class DuplicateUsernameError(AppException):
    """Username (and therefore login) is already taken."""

    def __init__(self, username: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message="Username already exists",
            status_code=409,
            details={"username": username} if username else None,
        )


class DuplicateEmailError(AppException):
    """Email is already registered to another account."""

    def __init__(self, email: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_TAKEN,
            message="Email already exists",
            status_code=409,
            details={"email": email} if email else None,
        )


class InfrastructureError(AppException):
    """Store, hasher or timeout failure beneath the domain layer.

    Only a generic message reaches the caller; the cause is logged.
    """

    def __init__(self, message: str = "A backing service failed. Please try again later.") -> None:
        super().__init__(
            error_code=ErrorCode.INFRASTRUCTURE_ERROR,
            message=message,
            status_code=500,
        )
