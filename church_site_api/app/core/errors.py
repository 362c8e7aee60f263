"""
Application errors and their HTTP rendering.

Every failure the API reports carries a fixed machine‑checkable
``kind`` and a human‑readable message.  ``register_exception_handlers``
renders them in the response envelope used by the frontend::

    {"success": false, "error": "<message>"}

Storage errors are never rendered directly.  The database layer raises
``StoreError`` and callers convert it to a ``FetchFailure`` with a
generic message through the ``store_failure`` context manager, so raw
SQLite text never reaches a response body.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    INVALID_LIMIT = "InvalidLimit"
    INVALID_OFFSET = "InvalidOffset"
    INVALID_ID = "InvalidId"
    INVALID_TYPE = "InvalidType"
    INVALID_DATE = "InvalidDate"
    INVALID_BODY = "InvalidBody"
    MISSING_FIELD = "MissingField"
    BANNER_NOT_FOUND_OR_NOT_FEATURED = "BannerNotFoundOrNotFeatured"
    NOT_FOUND = "NotFound"
    FETCH_FAILURE = "FetchFailure"
    TENANT_RESOLUTION_FAILURE = "TenantResolutionFailure"
    INTERNAL = "Internal"


class AppError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Invalid client input, detected before any store access."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_kind = ErrorKind.INVALID_BODY


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_kind = ErrorKind.NOT_FOUND


class FetchFailure(AppError):
    """An underlying store call failed; the message is deliberately generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_kind = ErrorKind.FETCH_FAILURE


class StoreError(Exception):
    """Raised by the database layer when a query cannot be executed."""


@contextmanager
def store_failure(message: str) -> Iterator[None]:
    """Convert ``StoreError`` raised inside the block into ``FetchFailure``."""
    try:
        yield
    except StoreError as exc:
        logger.exception("%s: %s", message, exc)
        raise FetchFailure(message) from exc


def error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def validation_error_from(exc: RequestValidationError) -> ValidationError:
    """Turn the first pydantic error into a ``ValidationError``.

    Messages follow the wording the frontend already displays:
    ``Missing required field: title``, ``Invalid start_date format``,
    or the text of a ``ValueError`` raised by a schema validator.
    """
    errors = exc.errors()
    if not errors:
        return ValidationError("Invalid request")
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = loc[-1] if loc else "body"
    err_type = first.get("type", "")
    if err_type == "missing":
        return ValidationError(f"Missing required field: {field}", kind=ErrorKind.MISSING_FIELD)
    if err_type.startswith("datetime") or err_type.startswith("date_"):
        return ValidationError(f"Invalid {field} format", kind=ErrorKind.INVALID_DATE)
    if err_type == "value_error":
        ctx_error = (first.get("ctx") or {}).get("error")
        if ctx_error is not None:
            message = str(ctx_error)
        else:
            message = str(first.get("msg", "")).removeprefix("Value error, ")
        # Schema validators reuse the missing-field wording for empty strings.
        if message.startswith("Missing required field"):
            return ValidationError(message, kind=ErrorKind.MISSING_FIELD)
        return ValidationError(message)
    if err_type == "json_invalid":
        return ValidationError("Invalid JSON body")
    return ValidationError(f"Invalid {field}: {first.get('msg', 'invalid value')}")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach envelope‑producing exception handlers to ``app``."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = validation_error_from(exc)
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, error.kind.value, error.message)
        return JSONResponse(status_code=error.status_code, content=error_body(error.message))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Route not found"
        else:
            message = str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content=error_body(message), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error"),
        )
