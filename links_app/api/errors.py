"""
Exception handlers: map the error taxonomy to HTTP responses.

Expected failures (``LinkError``) carry their own status and message.
Everything else is logged with its traceback and answered with a generic
500 so no internals reach the client.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from links_app.exceptions import InternalError, LinkError, TransientStoreError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def link_error_handler(request: Request, exc: LinkError) -> JSONResponse:
    if isinstance(exc, TransientStoreError):
        logger.warning("Transient store failure on %s %s", request.method, request.url.path)
    elif exc.status_code >= 500:
        logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc)
    return _error(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched paths, wrong methods: same body shape as every other error
    response = _error(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(InternalError.status_code, InternalError.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LinkError, link_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
