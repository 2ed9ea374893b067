"""
Async-first NAVI API client.

This module provides the NaviClient class that performs every HTTP call of
the SDK. Features include:

- Async-first design with async/await for all API operations
- Multiple HTTP transport backends (httpx, aiohttp, requests)
- Pluggable middleware system for request/response processing
- Retry logic with exponential backoff for transient network failures
- Convenience methods over the memoized module-level API functions

Example usage:
    from navi_sdk import NaviClient, NaviSettings

    async with NaviClient(NaviSettings(env="prod")) as client:
        pools = await client.get_pools(cache_time=60_000)
        sui = await client.get_pool("0x2::sui::SUI")
"""

import logging
from typing import Any

from tenacity import AsyncRetrying
from tenacity import before_sleep_log
from tenacity import retry_if_exception_type
from tenacity import stop_after_attempt
from tenacity import wait_exponential
from tenacity.wait import wait_base

from navi_sdk.config import NaviSettings
from navi_sdk.exceptions import NaviAPIError
from navi_sdk.exceptions import NaviTransportError
from navi_sdk.middleware import Middleware
from navi_sdk.transport import BaseTransport
from navi_sdk.transport import get_transport

logger = logging.getLogger("navi_sdk.client")


class NaviClient:
    """
    Async client for the NAVI open API.

    Module-level API functions (`navi_sdk.lending`, `navi_sdk.account`,
    `navi_sdk.aggregator`) accept a `client` option; this class passes itself
    there. The client handle is not part of any cache key, so every client
    in the process shares the same memoized results.

    Args:
        settings (NaviSettings | None): SDK configuration (default: from environment)
        transport_name (str | None): Transport backend ('httpx', 'aiohttp', 'requests').
                                     Defaults to settings.transport
        middlewares (list[Middleware] | None): Request/response hooks
        retry_attempts (int | None): Maximum attempts per request on network failures
                                     (default: settings.retry_attempts)
        retry_wait (wait_base | None): tenacity wait strategy between attempts
        transport (BaseTransport | None): Ready-made transport; overrides transport_name
    """

    def __init__(
        self,
        settings: NaviSettings | None = None,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
        retry_attempts: int | None = None,
        retry_wait: wait_base | None = None,
        transport: BaseTransport | None = None,
    ):
        self.settings = settings or NaviSettings()
        self.transport = transport or get_transport(
            transport_name or self.settings.transport, timeout=self.settings.timeout
        )
        self.middlewares = middlewares or []
        self._retry_attempts = retry_attempts or self.settings.retry_attempts
        self._retry_wait = retry_wait or wait_exponential(multiplier=0.5, min=1, max=5)

    async def request_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a JSON document from the API.

        Network failures are retried with exponential backoff; HTTP error
        statuses are not.

        Args:
            path (str): Path under settings.base_url, e.g. '/api/navi/pools'
            params (dict | None): Query parameters

        Returns:
            Any: Decoded JSON body

        Raises:
            NaviTransportError: If every attempt failed at the network level
            NaviAPIError: On a non-200 status or a body that is not JSON
        """
        url = f"{self.settings.base_url.rstrip('/')}{path}"
        headers = {"User-Agent": self.settings.user_agent, "Accept": "application/json"}

        for mw in self.middlewares:
            await mw.on_request(method="GET", url=url, headers=headers, params=params)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception_type(NaviTransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                response = await self.transport.request(
                    method="GET",
                    url=url,
                    headers=headers,
                    params=params,
                )

        for mw in self.middlewares:
            await mw.on_response(response)

        if response.status_code != 200:
            raise NaviAPIError(
                f"Unexpected status: {response.status_code} for {path}",
                details=response.text,
                status_code=response.status_code,
            )
        return response.json()

    def _options(self, **options) -> dict[str, Any]:
        options = {k: v for k, v in options.items() if v is not None}
        options["client"] = self
        return options

    def _env_options(self, env: str | None = None, **options) -> dict[str, Any]:
        # env is always explicit so it lands in the cache key
        return self._options(env=env or self.settings.env, **options)

    async def get_config(self, env: str | None = None, **options) -> dict:
        from navi_sdk import lending

        return await lending.get_config(self._env_options(env, **options))

    async def get_pools(self, env: str | None = None, **options) -> list[dict]:
        from navi_sdk import lending

        return await lending.get_pools(self._env_options(env, **options))

    async def get_pool(self, identifier, env: str | None = None) -> dict:
        from navi_sdk import lending

        return await lending.get_pool(identifier, self._env_options(env))

    async def get_stats(self, **options) -> dict:
        from navi_sdk import lending

        return await lending.get_stats(self._options(**options))

    async def get_fees(self, **options) -> dict:
        from navi_sdk import lending

        return await lending.get_fees(self._options(**options))

    async def get_flashloan_assets(self, env: str | None = None, **options) -> list[dict]:
        from navi_sdk import lending

        return await lending.get_flashloan_assets(self._env_options(env, **options))

    async def get_flashloan_asset(self, identifier, env: str | None = None) -> dict | None:
        from navi_sdk import lending

        return await lending.get_flashloan_asset(identifier, self._env_options(env))

    async def get_positive_slippage_setting(self, **options) -> bool:
        from navi_sdk import aggregator

        return await aggregator.get_positive_slippage_setting(
            self._options(**options)
        )

    async def get_user_transactions(self, address: str, cursor: str | None = None) -> dict:
        from navi_sdk import account

        return await account.get_user_transactions(
            address, self._options(cursor=cursor)
        )

    async def get_user_total_claimed_reward(self, address: str) -> dict:
        from navi_sdk import account

        return await account.get_user_total_claimed_reward(address, self._options())

    async def get_user_claimed_reward_history(
        self, address: str, page: int | None = None, size: int | None = None
    ) -> dict:
        from navi_sdk import account

        return await account.get_user_claimed_reward_history(
            address, self._options(page=page, size=size)
        )

    async def aclose(self):
        """Close the underlying transport and its connection pool."""
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


_default_client: NaviClient | None = None


def get_default_client() -> NaviClient:
    """Process-wide client used by API functions called without a `client` option."""
    global _default_client
    if _default_client is None:
        _default_client = NaviClient()
    return _default_client


def resolve_client(options: dict[str, Any] | None) -> NaviClient:
    return (options or {}).get("client") or get_default_client()
