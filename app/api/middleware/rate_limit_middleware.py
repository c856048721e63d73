# ===== app/api/middleware/rate_limit_middleware.py =====
from collections import deque
from typing import Callable, Deque, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import logging
import time

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-client rate limiting for the API routes.

    Clients are keyed by remote address; request headers are caller supplied
    and never used as the key. Uses a sliding window kept in process memory,
    so limits are per worker process. Keys whose window has emptied are
    dropped, so the map only holds clients seen within the last window.
    """

    def __init__(
            self,
            app,
            requests_per_second: int = 10,
            window_seconds: float = 1.0,
            clock: Callable[[], float] = time.monotonic
    ):
        super().__init__(app)
        self.requests_per_second = requests_per_second
        self.window_seconds = window_seconds
        self.clock = clock
        self.request_times: Dict[str, Deque[float]] = {}
        self._last_sweep = clock()

    @staticmethod
    def _client_key(request: Request) -> str:
        return request.client.host if request.client else "unknown"

    def _expire(self, key: str, current_time: float) -> None:
        window = self.request_times.get(key)
        if window is None:
            return
        while window and current_time - window[0] >= self.window_seconds:
            window.popleft()
        if not window:
            del self.request_times[key]

    def _sweep(self, current_time: float) -> None:
        """Drop every client that has been idle for a whole window"""
        if current_time - self._last_sweep < self.window_seconds:
            return
        for key in list(self.request_times):
            self._expire(key, current_time)
        self._last_sweep = current_time

    async def dispatch(self, request: Request, call_next):
        # Only apply to API routes
        if not request.url.path.startswith("/api/v1/"):
            return await call_next(request)

        key = self._client_key(request)
        current_time = self.clock()

        self._sweep(current_time)
        self._expire(key, current_time)

        window = self.request_times.setdefault(key, deque())
        if len(window) >= self.requests_per_second:
            logger.warning(f"Rate limit exceeded for {key} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Rate limit exceeded. Too many requests per second.",
                    "retry_after": 1
                },
                headers={"Retry-After": "1"}
            )

        window.append(current_time)
        return await call_next(request)
