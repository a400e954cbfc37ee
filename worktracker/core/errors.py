"""Error taxonomy and the handlers that turn it into JSON responses.

Every error body carries a ``message``; validation errors also name the
offending ``field`` when one can be identified.
"""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from worktracker.core.logging import get_logger

logger = get_logger(__name__)


class WorkTrackerError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, str]:
        return {"message": self.message}


class ValidationError(WorkTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_payload(self) -> dict[str, str]:
        payload = super().to_payload()
        if self.field:
            payload["field"] = self.field
        return payload


class NotFoundError(WorkTrackerError):
    status_code = status.HTTP_404_NOT_FOUND


class ConfigurationError(WorkTrackerError):
    """The configured database or environment cannot support an operation."""


_LOCATION_ROOTS = frozenset({"body", "query", "path", "header", "cookie"})


def _first_validation_error(exc: RequestValidationError) -> ValidationError:
    errors = exc.errors()
    if not errors:
        return ValidationError("Invalid request")
    first = errors[0]
    location = list(first.get("loc", ()))
    if location and location[0] in _LOCATION_ROOTS:
        location = location[1:]
    field = None
    if location and isinstance(location[0], str):
        field = ".".join(str(part) for part in location)
    message = str(first.get("msg", "Invalid value")).removeprefix("Value error, ")
    return ValidationError(message, field=field)


async def handle_worktracker_error(request: Request, exc: WorkTrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = _first_validation_error(exc)
    logger.info("request_rejected", path=request.url.path, field=error.field, reason=error.message)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkTrackerError, handle_worktracker_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
