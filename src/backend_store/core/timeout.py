import asyncio
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .responses import envelope

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """
    Per-request deadline. A request running longer than `timeout_seconds` is
    cancelled (the cancellation reaches the awaiting database call, so open
    transactions roll back) and answered with 504.

    `timeout_seconds <= 0` disables the deadline.
    """

    def __init__(self, app, timeout_seconds: float = 30.0):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next):
        if self.timeout_seconds <= 0:
            return await call_next(request)
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "http.request.timeout",
                extra={"method": request.method, "path": request.url.path, "timeout_s": self.timeout_seconds},
            )
            return envelope(504, "Request timed out")
