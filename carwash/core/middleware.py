# carwash/core/middleware.py
"""Correlation IDs and access logging for the booking API"""
import logging
import time
import uuid
from starlette.requests import Request

logger = logging.getLogger("carwash.access")

CORRELATION_HEADER = "X-Correlation-ID"

# Probes hit these every few seconds
UNLOGGED_PREFIXES = ("/health",)


async def correlation_id_middleware(request: Request, call_next):
    """Reuse the caller's X-Correlation-ID or mint one, and echo it back"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """One line per request; client errors at WARNING, server errors at ERROR"""
    if request.url.path.startswith(UNLOGGED_PREFIXES):
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

    if response.status_code >= 500:
        level = logging.ERROR
    elif response.status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger.log(
        level,
        f"{request.method} {request.url.path} {response.status_code} {elapsed_ms}ms",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "-"),
            "client": request.client.host if request.client else "-",
        },
    )
    return response
