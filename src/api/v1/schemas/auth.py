"""Pydantic schemas for the login endpoint."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials submitted for a bearer token."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued bearer token."""

    token: str
    token_type: str = "bearer"
