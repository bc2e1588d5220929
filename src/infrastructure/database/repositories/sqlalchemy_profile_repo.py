"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.account import AccountRole, Profile
from infrastructure.database.errors import translate_integrity_error
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID, lock: bool = False) -> Profile | None:
        """Get a profile by ID."""
        model = await self._get_model(id, lock=lock)
        return self._to_entity(model) if model else None

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by username."""
        stmt = select(ProfileModel).where(ProfileModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email."""
        stmt = select(ProfileModel).where(ProfileModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get all profiles, oldest first."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at, ProfileModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._flush(profile)
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        model = await self._get_model(profile.id)

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.username = profile.username
        model.email = profile.email
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        model.role = profile.role.value
        model.updated_at = profile.updated_at

        await self._flush(profile)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID, lock: bool = False) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        if lock:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _flush(self, profile: Profile) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(
                exc, username=profile.username, email=profile.email
            ) from exc

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            username=model.username,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            role=AccountRole(model.role),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            username=entity.username,
            email=entity.email,
            first_name=entity.first_name,
            last_name=entity.last_name,
            role=entity.role.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
