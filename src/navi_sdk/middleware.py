"""
Middleware interface for NaviClient.

This module defines the `Middleware` protocol used in NAVI SDK. It hooks
into the request/response lifecycle of every HTTP call made by `NaviClient`.

Any class that implements this interface can be passed to the client as a
middleware.

Current implementations:
- Logging (see: LoggingMiddleware) - logs requests/responses with timing

Middleware runs once per underlying HTTP request. Calls answered from the
memoization cache, or joined onto another caller's in-flight request, never
reach it.
"""

from typing import Any
from typing import Protocol

from navi_sdk.transport.base import UnifiedResponse


class Middleware(Protocol):
    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any] | None,
    ) -> None:
        """
        Called before the HTTP request is executed.

        Headers may be modified in place. Raising aborts the request.

        Args:
            method (str): HTTP method, e.g., 'GET'
            url (str): Full URL of the request
            headers (dict): Request headers (modifiable)
            params (dict | None): Query parameters
        """

    async def on_response(self, response: UnifiedResponse) -> None:
        """
        Called after the HTTP response is received (before it's parsed).

        Args:
            response (UnifiedResponse): Unified response object from transport layer
        """
