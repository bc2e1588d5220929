"""Translation of store-level failures into application errors."""

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AppException,
    DuplicateEmailError,
    DuplicateUsernameError,
    InfrastructureError,
)

logger = structlog.get_logger()

# SQLite reports "table.column", PostgreSQL reports the index name
_USERNAME_MARKERS = (
    "profiles.username",
    "ix_profiles_username",
    "credentials.login",
    "ix_credentials_login",
)
_EMAIL_MARKERS = ("profiles.email", "ix_profiles_email")


def translate_integrity_error(
    exc: IntegrityError, username: str | None = None, email: str | None = None
) -> AppException:
    """Map a unique-constraint violation to the matching duplicate error.

    The unique indexes are the authoritative guard against concurrent
    registrations that both passed the application-level check. When the
    conflicting value is not known, the error carries no details.
    """
    message = str(exc.orig)
    if any(marker in message for marker in _USERNAME_MARKERS):
        return DuplicateUsernameError(username)
    if any(marker in message for marker in _EMAIL_MARKERS):
        return DuplicateEmailError(email)
    logger.error("integrity_error", error=message)
    return InfrastructureError()
