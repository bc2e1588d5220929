"""SQLAlchemy implementation of Credential repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.account import AccountRole, Credential
from infrastructure.database.errors import translate_integrity_error
from infrastructure.database.models import CredentialModel


class SQLAlchemyCredentialRepository:
    """SQLAlchemy implementation of ICredentialRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Credential | None:
        """Get a credential by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_by_login(self, login: str, lock: bool = False) -> Credential | None:
        """Get a credential by login."""
        stmt = select(CredentialModel).where(CredentialModel.login == login)
        if lock:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_profile_id(self, profile_id: UUID, lock: bool = False) -> Credential | None:
        """Get the credential linked to a profile."""
        stmt = select(CredentialModel).where(CredentialModel.profile_id == profile_id)
        if lock:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, credential: Credential) -> Credential:
        """Create a new credential."""
        model = self._to_model(credential)
        self._session.add(model)
        await self._flush(credential)
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, credential: Credential) -> Credential:
        """Update an existing credential."""
        model = await self._get_model(credential.id)

        if not model:
            raise ValueError(f"Credential {credential.id} not found")

        model.login = credential.login
        model.password_hash = credential.password_hash
        model.role = credential.role.value
        model.updated_at = credential.updated_at

        await self._flush(credential)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a credential."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID) -> CredentialModel | None:
        stmt = select(CredentialModel).where(CredentialModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _flush(self, credential: Credential) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(exc, username=credential.login) from exc

    def _to_entity(self, model: CredentialModel) -> Credential:
        """Convert ORM model to domain entity."""
        return Credential(
            id=model.id,
            login=model.login,
            password_hash=model.password_hash,
            role=AccountRole(model.role),
            profile_id=model.profile_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Credential) -> CredentialModel:
        """Convert domain entity to ORM model."""
        return CredentialModel(
            id=entity.id,
            login=entity.login,
            password_hash=entity.password_hash,
            role=entity.role.value,
            profile_id=entity.profile_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
