"""
Lending protocol data from the NAVI open API.

Every function here that reaches the network is `memoized`: concurrent calls
with the same arguments share one request, and results are reused while
fresh. Options are passed as a trailing dict or as keywords:

- env: 'prod' (default from settings), 'dev' or 'test'
- cache_time: freshness window in milliseconds (no window: reuse forever)
- disable_cache: always refetch, then store the fresh result
- client: NaviClient to use (default: get_default_client())

Example:
    pools = await get_pools({"env": "dev", "cache_time": 60_000})
    sui = await get_pool("0x2::sui::SUI")
"""

import logging
from typing import Any

from navi_sdk.cache import memoized
from navi_sdk.client import NaviClient
from navi_sdk.client import resolve_client
from navi_sdk.config import DEFAULT_CACHE_TIME
from navi_sdk.exceptions import NaviNotFoundError
from navi_sdk.utils import normalize_coin_type
from navi_sdk.utils import unwrap_data

logger = logging.getLogger("navi_sdk.lending")

AssetIdentifier = str | int | dict


def _env(options: dict | None, client: NaviClient) -> str:
    return (options or {}).get("env") or client.settings.env


@memoized
async def get_config(options: dict | None = None, **kwargs) -> dict:
    """Protocol configuration: package ids, storage objects, oracle and emode settings."""
    options = {**(options or {}), **kwargs}
    client = resolve_client(options)
    path = "/api/navi/config"
    body = await client.request_json(path, params={"env": _env(options, client)})
    return unwrap_data(body, path)


@memoized
async def get_pools(options: dict | None = None, **kwargs) -> list[dict]:
    """All lending pools of the environment."""
    options = {**(options or {}), **kwargs}
    client = resolve_client(options)
    path = "/api/navi/pools"
    body = await client.request_json(path, params={"env": _env(options, client)})
    return unwrap_data(body, path)


@memoized
async def get_stats(options: dict | None = None, **kwargs) -> dict:
    """Protocol statistics: TVL, total borrows, utilization, user counts."""
    client = resolve_client({**(options or {}), **kwargs})
    path = "/api/navi/stats"
    return unwrap_data(await client.request_json(path), path)


@memoized
async def get_fees(options: dict | None = None, **kwargs) -> dict:
    """Fee breakdown. Unlike the other endpoints, the whole body is the payload."""
    client = resolve_client({**(options or {}), **kwargs})
    return await client.request_json("/api/navi/fee")


@memoized
async def get_flashloan_assets(options: dict | None = None, **kwargs) -> list[dict]:
    """Flash-loanable assets; each entry carries its `coinType`."""
    options = {**(options or {}), **kwargs}
    client = resolve_client(options)
    path = "/api/navi/flashloan"
    data = unwrap_data(
        await client.request_json(path, params={"env": _env(options, client)}), path
    )
    return [{**asset, "coinType": coin_type} for coin_type, asset in data.items()]


def _lookup_options(options: dict | None) -> dict[str, Any]:
    return {**(options or {}), "cache_time": DEFAULT_CACHE_TIME}


async def get_pool(identifier: AssetIdentifier, options: dict | None = None) -> dict:
    """
    Find one pool.

    Args:
        identifier: A pool dict (returned as-is), a coin type, or a pool id.
        options: Same options as get_pools; the pool list is reused for up to
            DEFAULT_CACHE_TIME.

    Raises:
        NaviNotFoundError: If no pool matches.
    """
    if isinstance(identifier, dict):
        return identifier

    pools = await get_pools(_lookup_options(options))
    for pool in pools:
        if isinstance(identifier, str):
            if normalize_coin_type(pool["suiCoinType"]) == normalize_coin_type(identifier):
                return pool
        elif pool.get("id") == identifier:
            return pool

    raise NaviNotFoundError(f"Pool not found: {identifier}")


async def get_flashloan_asset(
    identifier: AssetIdentifier, options: dict | None = None
) -> dict | None:
    """Find a flash-loanable asset by coin type, asset id or pool dict; None if absent."""
    assets = await get_flashloan_assets(_lookup_options(options))
    for asset in assets:
        if isinstance(identifier, str):
            if normalize_coin_type(asset["coinType"]) == normalize_coin_type(identifier):
                return asset
        elif isinstance(identifier, dict):
            if asset.get("assetId") == identifier.get("id"):
                return asset
        elif asset.get("assetId") == identifier:
            return asset
    return None
