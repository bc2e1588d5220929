"""Account service: keeps profile and credential records in sync."""

import asyncio
from collections.abc import Callable
from datetime import datetime
from typing import Optional
from uuid import UUID

import structlog

from core.exceptions import (
    AccountNotFoundError,
    DuplicateEmailError,
    DuplicateUsernameError,
)
from domain.entities.account import (
    AccountPatch,
    AccountRole,
    CallerIdentity,
    Credential,
    Profile,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService
from domain.services.ownership_guard import OwnershipGuard
from domain.services.password_hasher import IPasswordHasher

logger = structlog.get_logger()


class AccountService:
    """Service layer for account lifecycle.

    A profile and its credential are one aggregate: they are created, updated
    and deleted inside a single unit of work, and ``Credential.login`` always
    equals ``Profile.username``. Notifications go out only after commit.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_hasher: IPasswordHasher,
        notification_service: Optional["NotificationService"] = None,
        ownership_guard: OwnershipGuard | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher
        self._notification = notification_service
        self._guard = ownership_guard or OwnershipGuard()

    async def create_account(
        self,
        username: str,
        password: str,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> Profile:
        """Create a profile and its credential as one unit.

        Username uniqueness is checked before email uniqueness; the first
        conflict found is reported and nothing is written.
        """
        logger.info("account_create_requested", username=username)
        async with self._uow_factory() as uow:
            await self._require_username_available(uow, username)
            await self._require_email_available(uow, email)

            profile = await uow.profiles.create(
                Profile(
                    username=username,
                    email=email,
                    first_name=first_name,
                    last_name=last_name,
                    role=AccountRole.USER,
                )
            )
            await uow.credentials.create(
                Credential(
                    login=profile.username,
                    password_hash=await self._hash(password),
                    role=profile.role,
                    profile_id=profile.id,
                )
            )
            await uow.commit()

        logger.info("account_created", account_id=str(profile.id), username=profile.username)
        if self._notification:
            self._notification.account_created(profile)
        return profile

    async def get_account(self, account_id: UUID, requester: CallerIdentity) -> Profile:
        """Get an account the requester owns."""
        async with self._uow_factory() as uow:
            await self._guard.authorize(uow, requester, account_id)
            return await self._require_profile(uow, account_id)

    async def list_accounts(self) -> list[Profile]:
        """Snapshot of all profiles."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
        logger.info("accounts_listed", count=len(profiles))
        return profiles

    async def replace_account(
        self,
        account_id: UUID,
        username: str,
        password: str,
        email: str,
        first_name: str | None,
        last_name: str | None,
        requester: CallerIdentity,
    ) -> Profile:
        """Overwrite every field of an account.

        The password is always re-hashed and the role reset to ``USER``.
        """
        async with self._uow_factory() as uow:
            credential = await self._guard.authorize(uow, requester, account_id, lock=True)
            profile = await self._require_profile(uow, account_id, lock=True)

            if username != profile.username:
                await self._require_username_available(uow, username)
            if email != profile.email:
                await self._require_email_available(uow, email)

            now = datetime.utcnow()
            profile.username = username
            profile.email = email
            profile.first_name = first_name
            profile.last_name = last_name
            profile.role = AccountRole.USER
            profile.updated_at = now

            credential.login = username
            credential.password_hash = await self._hash(password)
            credential.role = profile.role
            credential.updated_at = now

            updated = await uow.profiles.update(profile)
            await uow.credentials.update(credential)
            await uow.commit()

        logger.info("account_replaced", account_id=str(account_id), username=updated.username)
        if self._notification:
            self._notification.account_updated(updated)
        return updated

    async def patch_account(
        self,
        account_id: UUID,
        patch: AccountPatch,
        requester: CallerIdentity,
    ) -> Profile:
        """Apply only the fields present in ``patch``.

        A new username is written to both records, and only when it differs
        from the current login. A new password touches the credential alone.
        """
        async with self._uow_factory() as uow:
            credential = await self._guard.authorize(uow, requester, account_id, lock=True)
            profile = await self._require_profile(uow, account_id, lock=True)

            profile_changed = False
            credential_changed = False

            if patch.username is not None and patch.username != credential.login:
                await self._require_username_available(uow, patch.username)
                logger.info("account_username_changing", account_id=str(account_id))
                profile.username = patch.username
                credential.login = patch.username
                profile_changed = credential_changed = True

            if patch.email is not None and patch.email != profile.email:
                await self._require_email_available(uow, patch.email)
                profile.email = patch.email
                profile_changed = True

            # Hash only once every uniqueness check has passed
            if patch.password is not None:
                logger.info("account_password_changing", account_id=str(account_id))
                credential.password_hash = await self._hash(patch.password)
                credential_changed = True

            if patch.first_name is not None and patch.first_name != profile.first_name:
                profile.first_name = patch.first_name
                profile_changed = True

            if patch.last_name is not None and patch.last_name != profile.last_name:
                profile.last_name = patch.last_name
                profile_changed = True

            if not (profile_changed or credential_changed):
                logger.info("account_patch_noop", account_id=str(account_id))
                return profile

            now = datetime.utcnow()
            if profile_changed:
                profile.updated_at = now
                profile = await uow.profiles.update(profile)
            if credential_changed:
                credential.updated_at = now
                await uow.credentials.update(credential)
            await uow.commit()

        logger.info("account_patched", account_id=str(account_id))
        if self._notification:
            self._notification.account_updated(profile, partial=True)
        return profile

    async def delete_account(self, account_id: UUID, requester: CallerIdentity) -> None:
        """Delete the credential, then the profile, in one transaction."""
        async with self._uow_factory() as uow:
            credential = await self._guard.authorize(uow, requester, account_id, lock=True)
            profile = await uow.profiles.get(account_id, lock=True)
            username = profile.username if profile else None

            await uow.credentials.delete(credential.id)
            if profile:
                await uow.profiles.delete(profile.id)
            await uow.commit()

        logger.info(
            "account_deleted",
            account_id=str(account_id),
            credential_id=str(credential.id),
        )
        if self._notification:
            self._notification.account_deleted(username)

    async def refresh_password_hash(self, login: str, password: str, verified_hash: str) -> None:
        """Re-hash a verified password with the current hasher parameters.

        ``verified_hash`` is the hash the password was checked against. If the
        stored hash no longer matches it, the password changed after the check
        and the newer hash is kept.
        """
        async with self._uow_factory() as uow:
            credential = await uow.credentials.get_by_login(login, lock=True)
            if not credential:
                return
            if credential.password_hash != verified_hash:
                logger.info("password_hash_refresh_skipped", login=login, reason="hash_changed")
                return
            credential.password_hash = await self._hash(password)
            credential.updated_at = datetime.utcnow()
            await uow.credentials.update(credential)
            await uow.commit()
        logger.info("password_hash_refreshed", login=login)

    async def _hash(self, password: str) -> str:
        # Argon2 is CPU bound; keep it off the event loop
        return await asyncio.to_thread(self._hasher.hash, password)

    async def _require_profile(
        self, uow: IUnitOfWork, account_id: UUID, lock: bool = False
    ) -> Profile:
        profile = await uow.profiles.get(account_id, lock=lock)
        if not profile:
            logger.error("profile_missing_for_credential", account_id=str(account_id))
            raise AccountNotFoundError(str(account_id))
        return profile

    async def _require_username_available(self, uow: IUnitOfWork, username: str) -> None:
        if await uow.profiles.get_by_username(username):
            logger.warning("username_taken", username=username)
            raise DuplicateUsernameError(username)

    async def _require_email_available(self, uow: IUnitOfWork, email: str) -> None:
        if await uow.profiles.get_by_email(email):
            logger.warning("email_taken", email=email)
            raise DuplicateEmailError(email)
