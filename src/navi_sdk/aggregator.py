"""Swap-aggregator settings published by the NAVI open API."""

from navi_sdk.cache import memoized
from navi_sdk.client import resolve_client
from navi_sdk.utils import unwrap_data


@memoized
async def get_positive_slippage_setting(options: dict | None = None, **kwargs) -> bool:
    """Whether swaps should keep positive slippage for the user."""
    client = resolve_client({**(options or {}), **kwargs})
    path = "/api/internal/ag/positive-slippage"
    data = unwrap_data(await client.request_json(path), path)
    return bool(data.get("should_enable_positive_slippage"))
