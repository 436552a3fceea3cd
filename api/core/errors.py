"""
HTTP error taxonomy and the app-level exception handlers.

Every error leaves the API as `{"error": "<message>"}` with the matching
status code. Storage faults and unexpected exceptions are logged and
reported as a generic 500.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error."


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Token invalid or expired.") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ValidationError(HTTPException):
    """
    Payload or identifier rejected before touching storage.

    `field` names the first violated field (None for payload-level rules).
    """

    def __init__(self, detail: str, *, field: str | None = None) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.field = field


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found.") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ServerError(HTTPException):
    def __init__(self, detail: str = SERVER_ERROR_MESSAGE) -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def format_field_error(field: str | None, message: str) -> str:
    if not field:
        return message
    return f"{field}: {message}"


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(exc.status_code, detail, getattr(exc, "headers", None))


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request.")

    first = errors[0]
    # loc looks like ("body", "amount") or ("path", "item_id").
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or None
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        format_field_error(field, str(first.get("msg") or "Invalid value.")),
    )


async def _storage_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception("storage_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(PyMongoError, _storage_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
