# app/core/middleware.py
"""Request tracing middleware: correlation IDs and per-request timing logs"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Reuse the caller's correlation ID or mint one, and echo it back"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log method, path, status and duration of every request"""
    start_time = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    client = request.client.host if request.client else "unknown"

    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            f"[{correlation_id}] {request.method} {request.url.path} failed (client={client})",
            exc_info=True
        )
        raise

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    response.headers["X-Process-Time-Ms"] = str(duration_ms)

    log = logger.warning if response.status_code >= 500 else logger.info
    log(
        f"[{correlation_id}] {request.method} {request.url.path} -> {response.status_code} "
        f"in {duration_ms}ms (client={client}, user={request.headers.get('X-User-Id', '-')})"
    )
    return response
