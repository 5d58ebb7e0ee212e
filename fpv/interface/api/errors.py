"""Exception handlers mapping errors to JSON responses.

Every error body has an `error` message; validation failures add an
`errors` list of `{field, message}` items.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from fpv.adapter.error import ProviderError
from fpv.domain.error import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from fpv.interface.error import AuthenticationRequiredError


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _request_field(loc: tuple) -> str:
    """Name the offending field of a request validation error.

    `("body", "readTime")` -> `"readTime"`; `("body", "tags", 0)` -> `"tags"`.
    """
    names = [str(part) for part in loc[1:] if isinstance(part, str)]
    if names:
        return names[-1]
    return str(loc[-1]) if loc else "body"


def setup_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            errors=[
                {"field": to_camel(error.field), "message": error.message}
                for error in exc.errors
            ],
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            errors=[
                {"field": _request_field(tuple(error["loc"])), "message": error["msg"]}
                for error in exc.errors()
            ],
        )

    @app.exception_handler(AuthenticationRequiredError)
    async def authentication_required_handler(
        _request: Request, exc: AuthenticationRequiredError
    ) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, str(exc))

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        logfire.warn("Authentication failed", path=request.url.path, error=str(exc))
        return _error(status.HTTP_403_FORBIDDEN, "Invalid or expired token")

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(
        _request: Request, exc: AuthorizationError
    ) -> JSONResponse:
        return _error(
            status.HTTP_403_FORBIDDEN, f"Not authorized to modify this {exc.resource}"
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(_request: Request, exc: ConflictError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        request: Request, exc: StorageError
    ) -> JSONResponse:
        logfire.error(
            "Storage failure",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            cause=repr(exc.__cause__),
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database operation failed")

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        # Statement failures that escaped a repository count as storage errors
        return await storage_error_handler(request, StorageError(str(exc)))

    @app.exception_handler(ProviderError)
    async def provider_error_handler(
        request: Request, exc: ProviderError
    ) -> JSONResponse:
        logfire.error("Identity provider failure", path=request.url.path, error=str(exc))
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE, "Identity provider unavailable"
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return _error(status.HTTP_404_NOT_FOUND, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logfire.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            _exc_info=exc,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
