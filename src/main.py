"""Accounts API entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import SERVICE_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from api.v1.dependencies import get_notification_service
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import (
    LOGIN_LIMIT,
    READ_LIMIT,
    WRITE_LIMIT,
    limiter,
    rate_limit_exceeded_handler,
)

logger = structlog.get_logger()

setup_logging()

API_DESCRIPTION = f"""\
## Accounts API

Registers users and keeps each account's public profile and login credential
consistent through create, replace, patch and delete.

### Authentication
Exchange a username and password for a token at `POST /api/v1/auth/login`,
then send it on every account endpoint except registration:
```
Authorization: Bearer <token>
```
Per-account endpoints only act on the caller's own account.

### Rate limits (per client)
- Reads: {READ_LIMIT}
- Writes: {WRITE_LIMIT}
- Login: {LOGIN_LIMIT}
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and readiness probes"},
    {"name": "users", "description": "Account registration and self-service management"},
    {"name": "auth", "description": "Token issuance"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup logging; on shutdown, flush notifications still in flight."""
    logger.info("application_started", environment=settings.app_env)
    yield
    notifications = get_notification_service()
    if notifications.pending:
        logger.info("draining_notifications", pending=notifications.pending)
    await notifications.drain()
    logger.info("application_stopped")


def _add_middleware(app: FastAPI) -> None:
    # Starlette runs the last added middleware first
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )


def create_app() -> FastAPI:
    """Build the Accounts API application."""
    app = FastAPI(
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=SERVICE_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    _add_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
