"""Unit tests for AuthenticationService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import domain.services.authentication_service as auth_module
from core.exceptions import ErrorCode, InvalidCredentialsError
from domain.entities.account import AccountRole, CallerIdentity, Credential
from domain.services.authentication_service import AuthenticationService
from tests.unit.conftest import FakePasswordHasher, FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork, hasher: FakePasswordHasher) -> AuthenticationService:
    return AuthenticationService(lambda: uow, password_hasher=hasher)


class TestAuthenticate:
    async def test_valid_password_returns_identity(
        self, service: AuthenticationService, uow: FakeUnitOfWork, credential: Credential
    ):
        uow.credentials.get_by_login.return_value = credential

        identity = await service.authenticate("alice", "p1")

        assert identity == CallerIdentity(login="alice", role=AccountRole.USER)

    async def test_role_comes_from_credential(
        self, service: AuthenticationService, uow: FakeUnitOfWork, credential: Credential
    ):
        credential.role = AccountRole.ADMIN
        uow.credentials.get_by_login.return_value = credential

        identity = await service.authenticate("alice", "p1")

        assert identity.role == AccountRole.ADMIN

    async def test_unknown_login_and_wrong_password_fail_identically(
        self, service: AuthenticationService, uow: FakeUnitOfWork, credential: Credential
    ):
        uow.credentials.get_by_login.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.authenticate("ghost", "p1")

        uow.credentials.get_by_login.return_value = credential
        with pytest.raises(InvalidCredentialsError) as mismatch:
            await service.authenticate("alice", "wrong")

        assert unknown.value.error_code == ErrorCode.INVALID_CREDENTIALS
        assert mismatch.value.error_code == ErrorCode.INVALID_CREDENTIALS
        assert unknown.value.message == mismatch.value.message
        assert unknown.value.status_code == mismatch.value.status_code == 401

    async def test_unknown_login_still_verifies_a_hash(
        self, uow: FakeUnitOfWork, hasher: FakePasswordHasher
    ):
        hasher.verify = MagicMock(return_value=False)
        service = AuthenticationService(lambda: uow, password_hasher=hasher)
        uow.credentials.get_by_login.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("ghost", "p1")

        hasher.verify.assert_called_once()

    async def test_password_never_logged(
        self,
        service: AuthenticationService,
        uow: FakeUnitOfWork,
        credential: Credential,
        monkeypatch: pytest.MonkeyPatch,
    ):
        logger = MagicMock()
        monkeypatch.setattr(auth_module, "logger", logger)
        uow.credentials.get_by_login.return_value = credential

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("alice", "s3cret-guess")

        for call in logger.method_calls:
            assert "s3cret-guess" not in repr(call)


class TestRehash:
    async def test_outdated_hash_is_refreshed(self, uow: FakeUnitOfWork, credential: Credential):
        accounts = MagicMock()
        accounts.refresh_password_hash = AsyncMock()
        service = AuthenticationService(
            lambda: uow,
            password_hasher=FakePasswordHasher(outdated=True),
            account_service=accounts,
        )
        uow.credentials.get_by_login.return_value = credential

        await service.authenticate("alice", "p1")

        accounts.refresh_password_hash.assert_awaited_once_with("alice", "p1", "hashed:p1")

    async def test_current_hash_is_left_alone(self, uow: FakeUnitOfWork, credential: Credential):
        accounts = MagicMock()
        accounts.refresh_password_hash = AsyncMock()
        service = AuthenticationService(
            lambda: uow, password_hasher=FakePasswordHasher(), account_service=accounts
        )
        uow.credentials.get_by_login.return_value = credential

        await service.authenticate("alice", "p1")

        accounts.refresh_password_hash.assert_not_awaited()

    async def test_refresh_failure_still_authenticates(
        self, uow: FakeUnitOfWork, credential: Credential
    ):
        accounts = MagicMock()
        accounts.refresh_password_hash = AsyncMock(side_effect=RuntimeError("store down"))
        service = AuthenticationService(
            lambda: uow,
            password_hasher=FakePasswordHasher(outdated=True),
            account_service=accounts,
        )
        uow.credentials.get_by_login.return_value = credential

        identity = await service.authenticate("alice", "p1")

        assert identity.login == "alice"
