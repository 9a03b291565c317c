"""
Exception Handlers

Renders every failure as the service's error body:

    {"error": "<human readable message>", "code": "<ERROR_CODE>"}

Domain exceptions carry their own status and code. Store consistency errors
and unexpected exceptions are logged with their traceback and reported as
500 INTERNAL_ERROR.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink.core.exceptions import (
    EndpointNotFoundError,
    StoreConsistencyError,
    URLShortenerException,
)

logger = logging.getLogger("url_shortener")


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code}
    )


async def handle_shortener_exception(
    request: Request, exc: URLShortenerException
) -> JSONResponse:
    if isinstance(exc, StoreConsistencyError):
        logger.error(
            f"Store consistency violation on {request.method} {request.url.path}: {exc}",
            exc_info=exc
        )
    return error_response(exc.status_code, exc.message, exc.error_code)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request body",
        "INVALID_REQUEST"
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        not_found = EndpointNotFoundError()
        return error_response(not_found.status_code, not_found.message, not_found.error_code)
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(exc.status_code, "Method not allowed", "METHOD_NOT_ALLOWED")
    return error_response(exc.status_code, str(exc.detail), "HTTP_ERROR")


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "INTERNAL_ERROR"
    )


def add_exception_handlers(app: FastAPI) -> None:
    """
    Register the error handlers on a FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(URLShortenerException, handle_shortener_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
