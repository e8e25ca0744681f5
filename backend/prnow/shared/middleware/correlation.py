"""
Request Middleware

Tags every request with a correlation ID (incoming X-Request-ID or a new one),
echoes it back on the response and writes one access line per request.
"""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from prnow.shared.core.logging import set_correlation_id

logger = logging.getLogger("request")


class CorrelationIdMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = set_correlation_id(request.headers.get("X-Request-ID"))
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f}ms)"
        )
        response.headers["X-Request-ID"] = correlation_id
        return response
