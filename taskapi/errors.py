# taskapi/errors.py
"""Client-facing error type and the exception handlers that render it."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
FORBIDDEN = "FORBIDDEN"
TASK_NOT_FOUND = "TASK_NOT_FOUND"
ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ApiError(Exception):
    """An error with a stable machine-readable code, rendered as a JSON envelope."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details

    def to_json(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "success": False,
            "error": self.error,
            "message": self.message,
        }
        if self.details is not None:
            body["details"] = self.details
        return body


def validation_error(message: str, details: Optional[dict[str, Any]] = None) -> ApiError:
    return ApiError(400, VALIDATION_ERROR, message, details)


@contextmanager
def internal_errors(message: str) -> Iterator[None]:
    """Convert anything other than an ApiError raised in the block into a 500."""
    try:
        yield
    except ApiError:
        raise
    except Exception as exc:
        logger.exception(message)
        raise ApiError(500, INTERNAL_SERVER_ERROR, message) from exc


def _field_name(loc: tuple) -> str:
    # ("body", "title") -> "title"; ("query", "page") -> "page"; ("body",) -> "body"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    if parts:
        return ".".join(parts)
    return str(loc[0]) if loc else "request"


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_json())


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details: dict[str, Any] = {}
    for err in exc.errors():
        details.setdefault(_field_name(tuple(err.get("loc", ()))), err.get("msg"))
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, details)
    error = validation_error("Invalid request data", details)
    return JSONResponse(status_code=400, content=error.to_json())


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code in (404, 405):
        error = ApiError(
            404,
            ENDPOINT_NOT_FOUND,
            f"Endpoint {request.method} {request.url.path} not found",
        )
    else:
        error = ApiError(exc.status_code, "HTTP_ERROR", str(exc.detail))
    return JSONResponse(status_code=error.status_code, content=error.to_json())


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = ApiError(500, INTERNAL_SERVER_ERROR, "An unexpected error occurred")
    return JSONResponse(status_code=500, content=error.to_json())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
