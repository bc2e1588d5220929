"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import InfrastructureError
from infrastructure.database.errors import translate_integrity_error
from infrastructure.database.repositories.sqlalchemy_credential_repo import (
    SQLAlchemyCredentialRepository,
)
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)

logger = structlog.get_logger()


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Store failures (driver errors, timeouts) leaving the context are
    rolled back and re-raised as ``InfrastructureError``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyProfileRepository(self._session)

    @property
    def credentials(self) -> SQLAlchemyCredentialRepository:
        """Get credential repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyCredentialRepository(self._session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            try:
                await self._session.commit()
            except IntegrityError as exc:
                raise translate_integrity_error(exc) from exc

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if not self._session:
            return
        try:
            if exc_type:
                await self.rollback()
            await self._session.close()
        except SQLAlchemyError:
            logger.exception("session_cleanup_failed")
        finally:
            self._session = None

        if isinstance(exc_val, (SQLAlchemyError, TimeoutError)):
            logger.error(
                "store_failure",
                error=str(exc_val),
                error_type=type(exc_val).__name__,
            )
            raise InfrastructureError() from exc_val
