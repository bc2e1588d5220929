"""Engine and session factory for the account store."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    """Pool and driver options so no store call waits unbounded."""
    options: dict[str, Any] = {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_timeout": settings.database_pool_timeout,
    }
    # Per-statement timeout is an asyncpg connect argument
    if url.startswith("postgresql+asyncpg"):
        options["connect_args"] = {"command_timeout": settings.database_command_timeout}
    return options


engine = create_async_engine(
    settings.async_database_url, **_engine_options(settings.async_database_url)
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, used by the readiness check."""
    async with async_session_factory() as session:
        yield session
