"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.account import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID, lock: bool = False) -> Profile | None:
        """Get a profile by ID, optionally locking the row for update."""
        ...

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by its unique username."""
        ...

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by its unique email."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile as a materialized list."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return success status."""
        ...
