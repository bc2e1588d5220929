"""Login route."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import get_auth_provider
from api.v1.dependencies import get_authentication_service
from api.v1.schemas.auth import LoginRequest, TokenResponse
from api.v1.schemas.common import ErrorResponse
from core.rate_limit import LOGIN_LIMIT, limiter
from domain.services.authentication_service import AuthenticationService
from infrastructure.auth.provider import IAuthProvider

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Exchange login and password for a bearer token",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid login or password"},
    },
)
@limiter.limit(LOGIN_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenResponse:
    """Verify credentials and issue a token carrying the login and role."""
    identity = await service.authenticate(body.username, body.password)
    return TokenResponse(token=auth_provider.create_token(identity))
