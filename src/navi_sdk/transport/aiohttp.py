"""
Aiohttp transport implementation for NAVI SDK.

Alternative async HTTP backend. The session is created lazily on the first
request so the transport can be constructed outside a running event loop.
"""

import asyncio
from typing import Any

import aiohttp

from navi_sdk.exceptions import NaviTransportError

from .base import BaseTransport
from .base import UnifiedResponse


class AiohttpTransport(BaseTransport):
    """
    Async transport implementation using aiohttp.ClientSession.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )

        try:
            async with self._session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                timeout=aiohttp.ClientTimeout(total=timeout or self._timeout),
            ) as response:
                text = await response.text()
                return UnifiedResponse(
                    status_code=response.status,
                    text=text,
                    url=str(response.url),
                    headers=dict(response.headers),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise NaviTransportError(err) from err

    async def close(self):
        if self._session:
            await self._session.close()
