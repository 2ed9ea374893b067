import asyncio
from typing import Any

import requests

from navi_sdk.exceptions import NaviTransportError

from .base import BaseTransport
from .base import UnifiedResponse


class RequestsTransport(BaseTransport):
    """
    Sync transport implementation using requests.Session.

    Each request runs in the default executor so the event loop is not
    blocked. Prefer httpx or aiohttp where possible.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session = requests.Session()

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        loop = asyncio.get_running_loop()

        def make_request() -> requests.Response:
            return self._session.request(
                method=method,
                url=url,
                headers=headers or {},
                params=params or {},
                timeout=timeout or self._timeout,
            )

        try:
            response = await loop.run_in_executor(None, make_request)
        except requests.RequestException as err:
            raise NaviTransportError(err) from err

        return UnifiedResponse(
            status_code=response.status_code,
            text=response.text,
            url=response.url,
            headers=dict(response.headers),
        )

    async def close(self):
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._session.close)
