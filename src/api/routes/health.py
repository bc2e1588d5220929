"""Liveness and readiness probes."""

from datetime import datetime

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

logger = structlog.get_logger()

router = APIRouter(tags=["health"])

SERVICE_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Probe result. ``database`` is only set by the readiness probe."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None


def _report(status: str, database: str | None = None) -> HealthResponse:
    return HealthResponse(
        status=status,
        version=SERVICE_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=database,
    )


async def _account_store_status(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, TimeoutError) as e:
        logger.warning("health_database_unreachable", error=str(e))
        return "unhealthy"
    return "healthy"


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    """Process is up. Does not touch the account store."""
    return _report("healthy")


@router.get("/health/detailed", response_model=HealthResponse, summary="Readiness probe")
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Process is up and the account store answers queries."""
    database = await _account_store_status(db)
    return _report("healthy" if database == "healthy" else "degraded", database)
