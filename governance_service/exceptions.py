from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class GovernanceError(RuntimeError):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"


class ResourceNotFoundError(GovernanceError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Resource Not Found"

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(f"{resource_type} not found with id: {resource_id}")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceConflictError(GovernanceError):
    status_code = status.HTTP_409_CONFLICT
    error = "Resource Conflict"

    def __init__(self, resource_type: str, field: str, value: str) -> None:
        super().__init__(f"{resource_type} with {field} '{value}' already exists")
        self.field = field


class BusinessRuleViolationError(GovernanceError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Business Rule Violation"


def error_body(error: str, message: str, status_code: int, validation_errors: dict[str, str] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "error": error,
        "message": message,
        "status": status_code,
        "timestamp": datetime.now(timezone.utc),
    }
    if validation_errors is not None:
        body["validationErrors"] = validation_errors
    return jsonable_encoder(body)


def field_errors(errors: list[dict[str, Any]]) -> dict[str, str]:
    """Flatten pydantic error dicts into ``{field: message}``.

    Location prefixes such as ``body`` are dropped; the first message per field wins.
    """

    result: dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        message = str(err.get("msg") or "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        result.setdefault(field, message)
    return result


async def _handle_governance_error(request: Request, exc: GovernanceError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, str(exc), exc.status_code))


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            "Validation Failed",
            "Request validation failed",
            status.HTTP_400_BAD_REQUEST,
            validation_errors=field_errors(list(exc.errors())),
        ),
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error", "An unexpected error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GovernanceError, _handle_governance_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
