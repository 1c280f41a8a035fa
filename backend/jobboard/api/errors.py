"""
Error responses.

The one place where exceptions become HTTP responses. Every error body
has the shape ``{"error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.core.errors import AppError, OwnershipDenied

logger = logging.getLogger("errors")

_VALUE_ERROR_PREFIX = "Value error, "
_LOCATION_ROOTS = {"body", "query", "path", "cookie", "header"}
_HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


def first_error_message(errors: Sequence[dict[str, Any]]) -> str:
    """
    Human readable message for the first pydantic error.

    Messages raised by our own validators are returned as written; built-in
    constraint messages are prefixed with the offending field.
    """
    if not errors:
        return "Invalid request"

    error = errors[0]
    message = str(error.get("msg", "Invalid request"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        return message[len(_VALUE_ERROR_PREFIX):]

    fields = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS]
    if fields:
        return f"{'.'.join(fields)}: {message}"
    return message


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


async def ownership_denied_handler(request: Request, exc: OwnershipDenied) -> JSONResponse:
    # Missing and foreign resources must be indistinguishable from outside
    return JSONResponse(status_code=404, content=error_body("NOT_FOUND", exc.message))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[{_request_id(request)}] {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.code, exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=error_body("VALIDATION_ERROR", first_error_message(exc.errors())),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[{_request_id(request)}] Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", "An internal error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OwnershipDenied, ownership_denied_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
