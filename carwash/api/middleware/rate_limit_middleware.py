# ===== carwash/api/middleware/rate_limit_middleware.py =====
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import time

from carwash.utils.responses import error_body


class BookingRateLimitMiddleware(BaseHTTPMiddleware):
    """
    Limits booking creation (POST /api/v1/bookings) per client.

    Sliding window kept in process memory, keyed by the bearer token when
    present and the client address otherwise.
    """

    def __init__(self, app, max_requests: int = 10, window_seconds: int = 3600,
                 path: str = "/api/v1/bookings"):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path = path
        self.request_times = {}

    def _client_key(self, request: Request) -> str:
        auth = request.headers.get("Authorization")
        if auth:
            return auth
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next):
        if request.method != "POST" or request.url.path.rstrip("/") != self.path:
            return await call_next(request)

        key = self._client_key(request)
        current_time = time.time()

        self.request_times[key] = [
            t for t in self.request_times.get(key, [])
            if current_time - t < self.window_seconds
        ]

        if len(self.request_times[key]) >= self.max_requests:
            retry_after = int(self.window_seconds - (current_time - self.request_times[key][0])) + 1
            return JSONResponse(
                status_code=429,
                content=error_body("Too many booking attempts, please try again later"),
                headers={"Retry-After": str(retry_after)}
            )

        self.request_times[key].append(current_time)
        return await call_next(request)
