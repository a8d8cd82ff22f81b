"""
Domain errors and the application-wide error handlers.

Repositories and auth dependencies raise JoblyError subclasses at the point
of detection. Route handlers let them propagate; the handlers registered here
turn every failure into the same JSON envelope:

    {"error": {"message": ..., "status": ...}}
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: Any = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class ConflictError(JoblyError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


def error_response(message: Any, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


def _format_validation_error(err: dict) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    return f"{location}: {err.get('msg')}" if location else err.get("msg", "")


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    return error_response(exc.message, exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [_format_validation_error(err) for err in exc.errors()]
    return error_response(messages, status.HTTP_400_BAD_REQUEST)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.detail, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
