"""Error taxonomy and the handlers that render it.

Every error leaving the API has the same body:

    {"status": <int>, "message": <str>, "detail": <optional>}
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred."

    def __init__(
        self,
        message: str | None = None,
        detail: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.detail = detail
        self.headers = headers
        super().__init__(self.message)


class ValidationFailure(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "One or more validation errors occurred."


class AuthenticationFailure(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required."

    def __init__(self, message: str | None = None, detail: Any = None) -> None:
        super().__init__(message, detail, headers={"WWW-Authenticate": "Bearer"})


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists."


class InternalFailure(AppError):
    pass


def error_body(status_code: int, message: str, detail: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": status_code, "message": message}
    if detail is not None:
        body["detail"] = detail
    return body


def _field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        # drop the leading "body"/"path"/"query" segment
        loc = [str(p) for p in err.get("loc", ())[1:]] or ["request"]
        errors.setdefault(".".join(loc), []).append(err.get("msg", "Invalid value"))
    return errors


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, exc.detail),
        headers=exc.headers,
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    code = ValidationFailure.status_code
    return JSONResponse(
        status_code=code,
        content=error_body(code, ValidationFailure.default_message, _field_errors(exc)),
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, message),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    code = InternalFailure.status_code
    return JSONResponse(
        status_code=code,
        content=error_body(code, InternalFailure.default_message),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
