"""Notification sink that posts to the notification service over HTTP."""

import httpx
import structlog

from core.config import settings

logger = structlog.get_logger()


class HttpNotificationSink:
    """Delivers messages via ``POST {base_url}/notifications``.

    Payload: ``{"email": recipient, "subject": subject, "message": body}``.
    Non-2xx responses and transport errors raise; the dispatcher decides
    what to do with that.
    """

    def __init__(
        self,
        base_url: str = settings.notification_service_url,
        timeout: float = settings.notification_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def deliver(self, recipient: str, subject: str, body: str) -> None:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(
                "/notifications",
                json={"email": recipient, "subject": subject, "message": body},
            )
            response.raise_for_status()
        logger.debug("notification_posted", status_code=response.status_code)
