"""Pydantic schemas for Account API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AccountBase(BaseModel):
    """Fields shared by registration and full replacement."""

    username: str = Field(..., min_length=1, max_length=50, pattern=r"^\S+$")
    password: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class AccountCreate(AccountBase):
    """Schema for registering an account."""


class AccountReplace(AccountBase):
    """Schema for a full update. Every field is overwritten, password included."""


class AccountPatchRequest(BaseModel):
    """Schema for a partial update. Omitted fields are left untouched."""

    username: str | None = Field(None, min_length=1, max_length=50, pattern=r"^\S+$")
    password: str | None = Field(None, min_length=1, max_length=128)
    email: EmailStr | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class AccountResponse(BaseModel):
    """Public view of an account. Never carries password material."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "alice",
                "email": "alice@example.com",
                "first_name": "Alice",
                "last_name": "Liddell",
                "role": "USER",
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    created_at: datetime
    updated_at: datetime


class AccountListResponse(BaseModel):
    """Schema for list of Accounts."""

    data: list[AccountResponse]


class AccountDetailResponse(BaseModel):
    """Schema for single Account."""

    data: AccountResponse
