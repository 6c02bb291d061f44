"""
Request logging middleware.

Logs every incoming request line and the response status with its duration.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        logger.info("%s %s", request.method, target)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed: %s %s - %s",
                request.method, target, str(e),
                extra={"duration_ms": (time.time() - start_time) * 1000},
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "%s %s - %d (%.1fms)",
            request.method, target, response.status_code, duration_ms,
        )
        return response
