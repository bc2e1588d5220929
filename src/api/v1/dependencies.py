"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.account_service import AccountService
from domain.services.authentication_service import AuthenticationService
from domain.services.notification_service import INotificationSink, NotificationService
from infrastructure.auth.password_hasher import Argon2PasswordHasher
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.notifications.http_sink import HttpNotificationSink
from infrastructure.notifications.logging_sink import LoggingNotificationSink


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_password_hasher() -> Argon2PasswordHasher:
    """Get the shared password hasher."""
    return Argon2PasswordHasher()


@lru_cache
def get_notification_service() -> NotificationService:
    """Get Notification service instance.

    Falls back to log-only delivery when no notification service URL is set.
    """
    sink: INotificationSink
    if settings.notification_service_url:
        sink = HttpNotificationSink()
    else:
        sink = LoggingNotificationSink()
    return NotificationService(sink, recipient=settings.notification_admin_email)


@lru_cache
def get_account_service() -> AccountService:
    """Get Account service instance."""
    return AccountService(
        get_uow_factory(),
        password_hasher=get_password_hasher(),
        notification_service=get_notification_service(),
    )


@lru_cache
def get_authentication_service() -> AuthenticationService:
    """Get Authentication service instance."""
    return AuthenticationService(
        get_uow_factory(),
        password_hasher=get_password_hasher(),
        account_service=get_account_service(),
    )
