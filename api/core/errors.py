"""
API error taxonomy and the `{success: false, error: ...}` response envelope.

Every error a handler can raise on purpose is an `ApiError`. The public
message is fixed per class so that internals never reach the client.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationFailed(ApiError):
    status_code = 400
    message = "Invalid Data Provided"

    def __init__(self, fields: list[str] | None = None) -> None:
        super().__init__()
        # Kept for logs and tests; never sent to the client.
        self.fields = list(fields or [])


class DuplicateEmail(ApiError):
    status_code = 400
    message = "Email already exists"


class InvalidCredentials(ApiError):
    status_code = 400
    message = "Invalid Credentials"


class Unauthorized(ApiError):
    status_code = 403
    message = "Unauthorized"


class PostNotFound(ApiError):
    status_code = 404
    message = "Post not found"


class NotFoundOrUnauthorized(ApiError):
    status_code = 404
    message = "Post not found or Unauthorized"


class InternalError(ApiError):
    status_code = 500
    message = "Internal Server Error"


def envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, ValidationFailed):
        logger.info("validation_failed fields=%s", ",".join(exc.fields))
    return envelope(exc.status_code, exc.message)


async def _http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return envelope(exc.status_code, str(exc.detail))


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    logger.info("request_validation_failed fields=%s", ",".join(fields))
    return envelope(ValidationFailed.status_code, ValidationFailed.message)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return envelope(InternalError.status_code, InternalError.message)


def install_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
