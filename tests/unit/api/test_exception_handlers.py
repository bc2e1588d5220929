"""Unit tests for exception handlers."""

import json
from collections.abc import AsyncGenerator
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    AccountNotFoundError,
    DuplicateEmailError,
    ForbiddenError,
    InfrastructureError,
    InvalidCredentialsError,
)


class _Body(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


def _raise_infrastructure() -> None:
    try:
        raise ConnectionError("db at 10.0.0.5:5432 refused connection")
    except ConnectionError as exc:
        raise InfrastructureError() from exc


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    errors = {
        "not-found": lambda: AccountNotFoundError("some-id"),
        "forbidden": ForbiddenError,
        "duplicate-email": lambda: DuplicateEmailError("a@example.com"),
        "bad-login": InvalidCredentialsError,
    }

    @app.get("/raise/{kind}")
    async def _raise(kind: str) -> None:
        raise errors[kind]()

    @app.get("/infra")
    async def _infra() -> None:
        _raise_infrastructure()

    @app.get("/http")
    async def _http() -> None:
        raise HTTPException(status_code=405, detail="Method Not Allowed")

    @app.post("/validate")
    async def _validate(body: _Body) -> dict[str, bool]:
        return {"ok": True}

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestAppExceptionHandler:
    @pytest.mark.parametrize(
        ("kind", "status", "error_code"),
        [
            ("not-found", 404, "ACCOUNT_NOT_FOUND"),
            ("forbidden", 403, "FORBIDDEN"),
            ("duplicate-email", 409, "EMAIL_TAKEN"),
            ("bad-login", 401, "INVALID_CREDENTIALS"),
        ],
    )
    async def test_maps_domain_errors(
        self, client: AsyncClient, kind: str, status: int, error_code: str
    ):
        response = await client.get(f"/raise/{kind}")

        assert response.status_code == status
        assert response.json()["error_code"] == error_code

    async def test_not_found_carries_account_id(self, client: AsyncClient):
        body = (await client.get("/raise/not-found")).json()

        assert "some-id" in body["message"]
        assert body["details"] == {"account_id": "some-id"}

    async def test_forbidden_reveals_no_owner(self, client: AsyncClient):
        body = (await client.get("/raise/forbidden")).json()

        assert body["message"] == "You don't have permission to access this resource."
        assert body["details"] is None

    async def test_infrastructure_error_hides_cause(self, client: AsyncClient):
        response = await client.get("/infra")

        assert response.status_code == 500
        assert response.json()["error_code"] == "INFRASTRUCTURE_ERROR"
        assert "10.0.0.5" not in response.text
        assert set(response.json()["details"]) == {"request_id"}


class TestFrameworkErrors:
    async def test_http_exception_uses_error_envelope(self, client: AsyncClient):
        response = await client.get("/http")

        assert response.status_code == 405
        assert response.json() == {
            "error_code": "HTTP_ERROR",
            "message": "Method Not Allowed",
            "details": None,
        }

    async def test_validation_error_lists_fields(self, client: AsyncClient):
        response = await client.post("/validate", json={"username": "", "password": "hunter2"})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert [d["field"] for d in body["details"]] == ["body.username"]

    async def test_unhandled_exception_returns_500(self, app: FastAPI):
        handler = app.exception_handlers[Exception]
        request = MagicMock()
        request.state.request_id = "test-req-id"

        response = await handler(request, RuntimeError("Something went wrong"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"] == {"request_id": "test-req-id"}
