"""Response envelopes shared by every v1 route."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class FieldError(BaseModel):
    """One failed field check from request validation."""

    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    ``details`` is a dict for domain errors (``{"account_id": ...}``,
    ``{"request_id": ...}`` for server failures) and a list of
    ``FieldError`` for request validation failures.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "FORBIDDEN",
                "message": "You don't have permission to access this resource.",
                "details": None,
            }
        },
    )

    error_code: str
    message: str
    details: dict[str, Any] | list[FieldError] | None = None


class MessageResponse(BaseModel):
    """Confirmation for operations that return no account body."""

    message: str
