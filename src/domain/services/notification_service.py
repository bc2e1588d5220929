"""Best-effort dispatch of account lifecycle notifications."""

import asyncio
from typing import Protocol

import structlog

from domain.entities.account import Profile

logger = structlog.get_logger()

UNKNOWN_USERNAME = "[unknown]"


class INotificationSink(Protocol):
    """Transport that delivers a human-readable message to a recipient."""

    async def deliver(self, recipient: str, subject: str, body: str) -> None:
        """Deliver one message. May raise; callers treat failure as non-fatal."""
        ...


class NotificationSubjects:
    """Subject lines for account lifecycle events."""

    CREATED = "A new user has been created"
    UPDATED = "User Updated"
    DELETED = "User deleted"


class NotificationService:
    """Fire-and-forget notifications, sent after the account transaction commits.

    Every delivery runs on its own task. Failures are logged and swallowed so
    they can never change the outcome of the operation that triggered them.
    """

    def __init__(self, sink: INotificationSink, recipient: str) -> None:
        self._sink = sink
        self._recipient = recipient
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._pending)

    def dispatch(self, subject: str, body: str) -> None:
        """Schedule a delivery without waiting for it."""
        coro = self._deliver(subject, body)
        try:
            task = asyncio.create_task(coro)
        except RuntimeError:
            # No running loop
            coro.close()
            logger.exception("notification_dispatch_failed", subject=subject)
            return
        # Hold a reference so the task is not garbage collected mid-flight
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for all in-flight deliveries (shutdown and tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def account_created(self, profile: Profile) -> None:
        self.dispatch(
            NotificationSubjects.CREATED,
            f"User {profile.username} was successfully created with email {profile.email}",
        )

    def account_updated(self, profile: Profile, partial: bool = False) -> None:
        verb = "partially updated" if partial else "updated"
        self.dispatch(
            NotificationSubjects.UPDATED,
            f"User with username: {profile.username} has been successfully {verb}.",
        )

    def account_deleted(self, username: str | None) -> None:
        self.dispatch(
            NotificationSubjects.DELETED,
            f"User {username or UNKNOWN_USERNAME} was removed from the system.",
        )

    async def _deliver(self, subject: str, body: str) -> None:
        try:
            await self._sink.deliver(self._recipient, subject, body)
        except Exception:
            logger.exception(
                "notification_delivery_failed",
                recipient=self._recipient,
                subject=subject,
            )
        else:
            logger.info(
                "notification_delivered",
                recipient=self._recipient,
                subject=subject,
            )
