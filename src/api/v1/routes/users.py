"""Account API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_account_service
from api.v1.schemas.account import (
    AccountCreate,
    AccountDetailResponse,
    AccountListResponse,
    AccountPatchRequest,
    AccountReplace,
    AccountResponse,
)
from api.v1.schemas.common import ErrorResponse, MessageResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.account import AccountPatch, Profile
from domain.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


def _to_response(profile: Profile) -> AccountResponse:
    return AccountResponse(
        id=profile.id,
        username=profile.username,
        email=profile.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
        role=profile.role.value,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.post(
    "/register",
    response_model=AccountDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an account",
    responses={
        201: {"description": "Account created successfully"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountDetailResponse:
    """Create a profile and its login credential."""
    profile = await service.create_account(
        username=body.username,
        password=body.password,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return AccountDetailResponse(data=_to_response(profile))


@router.get(
    "",
    response_model=AccountListResponse,
    summary="List all accounts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_accounts(
    request: Request,
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """Get every account. Requires any authenticated caller."""
    profiles = await service.list_accounts()
    return AccountListResponse(data=[_to_response(profile) for profile in profiles])


@router.get(
    "/{account_id}",
    response_model=AccountDetailResponse,
    summary="Get an account",
    responses={
        403: {"model": ErrorResponse, "description": "Caller does not own this account"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_account(
    request: Request,
    account_id: UUID,
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> AccountDetailResponse:
    """Get the caller's own account."""
    profile = await service.get_account(account_id, user)
    return AccountDetailResponse(data=_to_response(profile))


@router.put(
    "/{account_id}",
    response_model=AccountDetailResponse,
    summary="Replace an account",
    responses={
        403: {"model": ErrorResponse, "description": "Caller does not own this account"},
        404: {"model": ErrorResponse, "description": "Account not found"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def replace_account(
    request: Request,
    account_id: UUID,
    body: AccountReplace,
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> AccountDetailResponse:
    """Overwrite every field of the caller's account, password included."""
    profile = await service.replace_account(
        account_id,
        username=body.username,
        password=body.password,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        requester=user,
    )
    return AccountDetailResponse(data=_to_response(profile))


@router.patch(
    "/{account_id}",
    response_model=AccountDetailResponse,
    summary="Partially update an account",
    responses={
        403: {"model": ErrorResponse, "description": "Caller does not own this account"},
        404: {"model": ErrorResponse, "description": "Account not found"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def patch_account(
    request: Request,
    account_id: UUID,
    body: AccountPatchRequest,
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> AccountDetailResponse:
    """Update only the fields present in the request body."""
    patch = AccountPatch(
        username=body.username,
        password=body.password,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    profile = await service.patch_account(account_id, patch, user)
    return AccountDetailResponse(data=_to_response(profile))


@router.delete(
    "/{account_id}",
    response_model=MessageResponse,
    summary="Delete an account",
    responses={
        403: {"model": ErrorResponse, "description": "Caller does not own this account"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    account_id: UUID,
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Delete the caller's account and its credential."""
    await service.delete_account(account_id, user)
    return MessageResponse(message=f"Account {account_id} deleted successfully")
