"""Application error taxonomy and its mapping to HTTP responses.

Services raise these; the handlers registered by `register_error_handlers`
turn them into `{"message": ...}` bodies so no route builds its own error
shape.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = 500
    message: str = "Server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthError(AppError):
    """Missing, malformed, expired, badly signed or blacklisted token."""
    status_code = 401
    message = "Please authenticate."
    headers = {"WWW-Authenticate": "Bearer"}


class AuthzError(AppError):
    status_code = 403
    message = "Access denied."


class NotFoundError(AppError):
    status_code = 404
    message = "Item not found"


class ValidationError(AppError):
    status_code = 400
    message = "Bad request"


class DuplicateError(AppError):
    status_code = 400
    message = "Username or email already registered"


class InvalidCredentials(AppError):
    status_code = 400
    message = "Invalid credentials"


class StoreError(AppError):
    status_code = 500
    message = "Server error"


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(ValidationError.status_code, ValidationError.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Framework-raised errors (unknown route, wrong method) keep their status.
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(StoreError.status_code, StoreError.message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
