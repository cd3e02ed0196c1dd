"""Request logging middleware."""

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from links_app.logging_config import ACCESS_LOGGER_NAME


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status and duration, failed ones included."""

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger(ACCESS_LOGGER_NAME)

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        # Stays 500 if the handler raises before a response exists
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.info(
                "%s %s from %s - %s (%.2fms)",
                request.method,
                request.url.path,
                client_ip,
                status_code,
                duration_ms,
            )
