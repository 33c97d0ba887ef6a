from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any, cast
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError

from library_api.core.logging import get_logger
from library_api.domain.errors import (
    DuplicateResourceError,
    InvalidArgumentError,
    InvalidStateError,
    LibraryError,
    ResourceNotFoundError,
)


class ErrorResponse(BaseModel):
    """Structured error body."""
    code: str
    message: str
    details: dict[str, object] | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


STATUS_BY_ERROR: dict[type[LibraryError], int] = {
    InvalidArgumentError: HTTP_400_BAD_REQUEST,
    InvalidStateError: HTTP_400_BAD_REQUEST,
    ResourceNotFoundError: HTTP_404_NOT_FOUND,
    DuplicateResourceError: HTTP_409_CONFLICT,
}


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a unique/duplicate-key violation."""
    error_message = str(exc.orig) if exc.orig is not None else str(exc)
    return "unique" in error_message.lower()


def _status_for(exc: LibraryError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cast(type[LibraryError], error_type)]
    return HTTP_400_BAD_REQUEST


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, object] | None = None,
) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _serialize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> list[dict[str, object]]:
    """Serialize validation errors, handling non-serializable objects in context."""

    serialized_errors: list[dict[str, object]] = []

    for error in errors:
        serialized_error: dict[str, object] = dict(error)
        serialized_error.pop("url", None)

        if "ctx" in serialized_error and isinstance(serialized_error["ctx"], dict):
            ctx: dict[str, object] = cast(dict[str, object], serialized_error["ctx"]).copy()

            if "error" in ctx:
                ctx["error"] = str(ctx["error"])
            serialized_error["ctx"] = ctx
        serialized_errors.append(serialized_error)
    return serialized_errors


def _field_messages(errors: Sequence[Mapping[Any, Any]]) -> dict[str, str]:
    """Flatten pydantic errors into {"field": "message"}."""
    fields: dict[str, str] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields[".".join(loc) or "request"] = str(error.get("msg", "Invalid value"))
    return fields


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers."""

    @app.exception_handler(LibraryError)
    async def library_error_handler(request: Request, exc: LibraryError) -> JSONResponse:
        status_code = _status_for(exc)
        logger = get_logger(__name__, request)
        logger.warning(
            "Request rejected",
            extra={"code": exc.code, "status_code": status_code, "error": exc.message},
        )
        return _error_response(status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("HTTP error", extra={"status_code": exc.status_code})
        if isinstance(exc.detail, dict):
            message = "Request failed"
            details = cast(dict[str, object], exc.detail)
        else:
            message = str(exc.detail) if exc.detail else "HTTP error"
            details = None
        return _error_response(exc.status_code, "HTTP_ERROR", message, details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.info("Validation error")
        fields = _field_messages(exc.errors())
        message = ", ".join(f"{name}: {msg}" for name, msg in fields.items()) or "Invalid request payload"
        return _error_response(
            HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            message,
            {"fields": fields, "errors": _serialize_validation_errors(exc.errors())},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("Database integrity error", extra={"error": str(exc)})

        error_message = str(exc.orig) if exc.orig is not None else str(exc)

        if is_unique_violation(exc):
            return _error_response(HTTP_409_CONFLICT, "DUPLICATE_RESOURCE", "Resource already exists")
        if "foreign key" in error_message.lower():
            return _error_response(HTTP_404_NOT_FOUND, "RESOURCE_NOT_FOUND", "Referenced resource not found")
        return _error_response(HTTP_400_BAD_REQUEST, "INVALID_ARGUMENT", "Data integrity violation")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Unhandled server error", exc_info=exc)
        return _error_response(
            HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "Internal server error occurred",
        )
