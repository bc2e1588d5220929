"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.account import CallerIdentity, Credential, Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.credentials = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


class FakePasswordHasher:
    """Reversible stand-in so tests can see which password was stored."""

    def __init__(self, outdated: bool = False) -> None:
        self.outdated = outdated

    def hash(self, plaintext: str) -> str:
        return f"hashed:{plaintext}"

    def verify(self, plaintext: str, password_hash: str) -> bool:
        return password_hash == f"hashed:{plaintext}"

    def needs_rehash(self, password_hash: str) -> bool:
        return self.outdated


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def account_id() -> UUID:
    """A random account (profile) ID."""
    return uuid4()


@pytest.fixture
def profile(account_id: UUID) -> Profile:
    """Stored profile for alice."""
    return Profile(
        id=account_id,
        username="alice",
        email="a@x.com",
        first_name="Alice",
        last_name="Liddell",
    )


@pytest.fixture
def credential(account_id: UUID) -> Credential:
    """Stored credential linked to alice's profile."""
    return Credential(login="alice", password_hash="hashed:p1", profile_id=account_id)


@pytest.fixture
def alice() -> CallerIdentity:
    return CallerIdentity(login="alice")


@pytest.fixture
def mallory() -> CallerIdentity:
    return CallerIdentity(login="mallory")
