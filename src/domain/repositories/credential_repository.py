"""Credential repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.account import Credential


class ICredentialRepository(Protocol):
    """Repository interface for Credential entities."""

    async def get(self, id: UUID) -> Credential | None:
        """Get a credential by its own ID."""
        ...

    async def get_by_login(self, login: str, lock: bool = False) -> Credential | None:
        """Get a credential by its unique login, optionally locking the row."""
        ...

    async def get_by_profile_id(self, profile_id: UUID, lock: bool = False) -> Credential | None:
        """Get the credential owned by a profile, optionally locking the row."""
        ...

    async def create(self, credential: Credential) -> Credential:
        """Create a new credential."""
        ...

    async def update(self, credential: Credential) -> Credential:
        """Update an existing credential."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a credential and return success status."""
        ...
