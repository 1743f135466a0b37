"""Error responses for the HTTP interface.

Domain errors carry a ``kind``; the handlers here turn them into
``{"error": kind, "message": ...}`` bodies with a matching status code.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError as DBInterfaceError
from sqlalchemy.exc import OperationalError

from carpool.domain.error import (
    ConflictError,
    DependencyFailureError,
    DomainError,
    MismatchedTripError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)

# Most specific class first
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (MismatchedTripError, status.HTTP_400_BAD_REQUEST),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (DependencyFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: DomainError) -> int:
    """HTTP status code of a domain error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_body(kind: str, message: str) -> dict[str, str]:
    """Uniform error payload shared by HTTP responses and WebSocket events."""
    return {"error": kind, "message": message}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error."""
    status_code = status_for(exc)
    logfire.warn(
        "Request failed",
        path=request.url.path,
        error_kind=exc.kind,
        error=str(exc),
        status_code=status_code,
    )
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.kind, str(exc)),
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI request validation failures."""
    errors = jsonable_encoder(exc.errors())
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"{location}: {errors[0].get('msg', message)}"
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={**error_body(ValidationError.kind, message), "details": errors},
    )


async def database_unavailable_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Render store connection failures as a dependency failure."""
    failure = DependencyFailureError("Database")
    logfire.error(
        "Database unavailable",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status_for(failure),
        content=error_body(failure.kind, "Service temporarily unavailable"),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render anything else without leaking internals."""
    logfire.exception(
        "Unexpected error",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("internal_error", "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an application."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(OperationalError, database_unavailable_handler)
    app.add_exception_handler(DBInterfaceError, database_unavailable_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
