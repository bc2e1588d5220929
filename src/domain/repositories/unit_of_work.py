"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.credential_repository import ICredentialRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions.

    Both account records are only ever written through one instance, so a
    profile and its credential commit or roll back together.
    """

    profiles: IProfileRepository
    credentials: ICredentialRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
