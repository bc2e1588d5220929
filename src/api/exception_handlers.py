"""Exception handlers: every failure leaves the API as an ``ErrorResponse``."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.v1.schemas.common import ErrorResponse, FieldError
from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error(
    status_code: int,
    error_code: str,
    message: str,
    details: dict[str, Any] | list[FieldError] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error_code=error_code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Domain and infrastructure errors raised by the account services."""
        server_side = exc.status_code >= 500
        log = logger.error if server_side else logger.warning
        log(
            "app_exception",
            error_code=exc.error_code.value,
            status_code=exc.status_code,
            message=exc.message,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
        )
        # Store and hasher detail stays in the log
        details = {"request_id": _request_id(request)} if server_side else exc.details
        return _error(exc.status_code, exc.error_code.value, exc.message, details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing errors (404 for unknown paths, 405) from Starlette."""
        return _error(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed request bodies, e.g. blank username or invalid email."""
        errors = [
            FieldError(
                field=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
                type=error["type"],
            )
            for error in exc.errors()
        ]
        # Field names only; submitted values may include passwords
        logger.info("validation_error", fields=[error.field for error in errors])
        return _error(
            422, ErrorCode.VALIDATION_ERROR.value, "Request validation failed", errors
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Anything that escaped the layers above."""
        request_id = _request_id(request)
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        message = str(exc) if not settings.is_production else "An unexpected error occurred"
        return _error(
            500, ErrorCode.INTERNAL_ERROR.value, message, {"request_id": request_id}
        )
