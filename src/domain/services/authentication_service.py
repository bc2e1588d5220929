"""Authentication gateway: login + password in, caller identity out."""

import asyncio
from collections.abc import Callable
from typing import Optional

import structlog

from core.exceptions import InvalidCredentialsError
from domain.entities.account import CallerIdentity
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.account_service import AccountService
from domain.services.password_hasher import IPasswordHasher

logger = structlog.get_logger()


class AuthenticationService:
    """Verifies submitted credentials against the credential store.

    Unknown logins and wrong passwords fail with the same error, and an
    unknown login still pays for one hash verification so response timing
    does not reveal which logins exist. The raw password is never logged.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_hasher: IPasswordHasher,
        account_service: Optional["AccountService"] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher
        self._accounts = account_service
        self._dummy_hash: str | None = None

    async def authenticate(self, login: str, password: str) -> CallerIdentity:
        """Return the caller identity for a valid login/password pair.

        Raises:
            InvalidCredentialsError: Login unknown or password mismatch.
        """
        async with self._uow_factory() as uow:
            credential = await uow.credentials.get_by_login(login)

        if not credential:
            await self._verify(password, await self._get_dummy_hash())
            logger.warning("authentication_failed", login=login, reason="unknown_login")
            raise InvalidCredentialsError()

        if not await self._verify(password, credential.password_hash):
            logger.warning("authentication_failed", login=login, reason="password_mismatch")
            raise InvalidCredentialsError()

        logger.info("authentication_succeeded", login=login)

        if self._accounts and self._hasher.needs_rehash(credential.password_hash):
            try:
                await self._accounts.refresh_password_hash(
                    login, password, credential.password_hash
                )
            except Exception:
                # The caller is authenticated either way
                logger.exception("password_hash_refresh_failed", login=login)

        return CallerIdentity(login=credential.login, role=credential.role)

    async def _verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._hasher.verify, password, password_hash)

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(
                self._hasher.hash, "timing-equalizer-not-a-real-password"
            )
        return self._dummy_hash
