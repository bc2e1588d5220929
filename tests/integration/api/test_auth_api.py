"""Integration tests for the login endpoint."""

import pytest
from httpx import AsyncClient

from infrastructure.auth.jwt_provider import JWTAuthProvider


@pytest.fixture
async def registered(api_client: AsyncClient) -> dict:
    response = await api_client.post(
        "/api/v1/users/register",
        json={"username": "alice", "password": "p1", "email": "a@example.com"},
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials_return_token(
        self, api_client: AsyncClient, registered: dict, auth_provider: JWTAuthProvider
    ) -> None:
        response = await api_client.post(
            "/api/v1/auth/login", json={"username": "alice", "password": "p1"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        identity = await auth_provider.validate_token(body["token"])
        assert identity is not None
        assert identity.login == "alice"

    @pytest.mark.asyncio
    async def test_issued_token_grants_access_to_own_account(
        self, api_client: AsyncClient, registered: dict
    ) -> None:
        login = await api_client.post(
            "/api/v1/auth/login", json={"username": "alice", "password": "p1"}
        )
        token = login.json()["token"]

        response = await api_client.get(
            f"/api/v1/users/{registered['id']}",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_login_look_the_same(
        self, api_client: AsyncClient, registered: dict
    ) -> None:
        wrong = await api_client.post(
            "/api/v1/auth/login", json={"username": "alice", "password": "nope"}
        )
        unknown = await api_client.post(
            "/api/v1/auth/login", json={"username": "ghost", "password": "p1"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()
        assert wrong.json()["error_code"] == "INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_missing_fields_return_422(self, api_client: AsyncClient) -> None:
        response = await api_client.post("/api/v1/auth/login", json={"username": "alice"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_garbage_token_is_rejected(
        self, api_client: AsyncClient, registered: dict
    ) -> None:
        response = await api_client.get(
            "/api/v1/users", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"
