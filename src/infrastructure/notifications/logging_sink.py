"""Notification sink that only writes to the log."""

import structlog

logger = structlog.get_logger()


class LoggingNotificationSink:
    """Used when no notification service is configured (local development)."""

    async def deliver(self, recipient: str, subject: str, body: str) -> None:
        logger.info("notification_logged", recipient=recipient, subject=subject, body=body)
