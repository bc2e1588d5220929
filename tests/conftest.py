"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.account import CallerIdentity
from domain.services.account_service import AccountService
from domain.services.authentication_service import AuthenticationService
from domain.services.notification_service import NotificationService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password_hasher import Argon2PasswordHasher
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one per test)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_EMAIL = "admin@test.local"


class RecordingSink:
    """Notification sink that remembers what it was asked to deliver."""

    def __init__(self, fail: bool = False) -> None:
        self.messages: list[tuple[str, str, str]] = []
        self.fail = fail

    async def deliver(self, recipient: str, subject: str, body: str) -> None:
        if self.fail:
            raise ConnectionError("notification service unreachable")
        self.messages.append((recipient, subject, body))


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def password_hasher() -> Argon2PasswordHasher:
    """Real Argon2 hasher with the cheapest legal parameters."""
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def notification_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
async def notification_service(
    notification_sink: RecordingSink,
) -> AsyncGenerator[NotificationService, None]:
    service = NotificationService(notification_sink, recipient=ADMIN_EMAIL)
    yield service
    await service.drain()


@pytest.fixture
def account_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    password_hasher: Argon2PasswordHasher,
    notification_service: NotificationService,
) -> AccountService:
    return AccountService(
        uow_factory,
        password_hasher=password_hasher,
        notification_service=notification_service,
    )


@pytest.fixture
def authentication_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    password_hasher: Argon2PasswordHasher,
    account_service: AccountService,
) -> AuthenticationService:
    return AuthenticationService(
        uow_factory,
        password_hasher=password_hasher,
        account_service=account_service,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_headers_for(auth_provider: JWTAuthProvider) -> Callable[[str], dict[str, str]]:
    """Build authorization headers for an arbitrary login."""

    def build(login: str) -> dict[str, str]:
        token = auth_provider.create_token(CallerIdentity(login=login))
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, default wiring)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    auth_provider: JWTAuthProvider,
    account_service: AccountService,
    authentication_service: AuthenticationService,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Uses an in-memory SQLite database
    - Overrides the token provider with the test secret
    - Overrides the account and authentication services
    - Records notifications instead of sending them
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_account_service, get_authentication_service
    from main import create_app

    app = create_app()

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_account_service] = lambda: account_service
    app.dependency_overrides[get_authentication_service] = lambda: authentication_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
