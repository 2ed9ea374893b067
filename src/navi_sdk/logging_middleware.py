"""
Logging middleware for NAVI SDK.

Logs every HTTP request and response made by NaviClient, with timing.
"""

import logging
import time
from contextvars import ContextVar
from typing import Callable

from navi_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("navi_sdk.middleware.logging")

# Start time of the request running in the current task. A request that
# never gets a response is simply overwritten by the next one.
_request_started: ContextVar[float | None] = ContextVar("navi_sdk_request_started", default=None)


class LoggingMiddleware:
    """
    Middleware for logging HTTP requests and responses in NaviClient.
    Uses standard Python logging.
    """

    def __init__(self, level: int = logging.INFO, clock: Callable[[], float] = time.monotonic):
        self._level = level
        self._clock = clock

    async def on_request(self, method: str, url: str, headers: dict, params):
        _request_started.set(self._clock())
        logger.log(self._level, f"Request: {method} {url} | params={params}")

    async def on_response(self, response: UnifiedResponse):
        started = _request_started.get()
        _request_started.set(None)
        logger.log(
            self._level,
            f"Response: {response.status_code} {response.url}"
            + (f" | elapsed={self._clock() - started:.3f}s" if started is not None else ""),
        )
