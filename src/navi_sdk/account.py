"""
Per-user history from the NAVI open API.

These calls are coalesced while in flight but never cached: a user's
history changes with every transaction.
"""

from navi_sdk.cache import with_singleton
from navi_sdk.client import resolve_client
from navi_sdk.utils import camelize
from navi_sdk.utils import unwrap_data


@with_singleton
async def get_user_transactions(address: str, options: dict | None = None) -> dict:
    """One page of a user's protocol transactions; pass the returned `cursor` for the next."""
    options = options or {}
    params = {"userAddress": address}
    if options.get("cursor"):
        params["cursor"] = options["cursor"]

    path = "/api/navi/user/transactions"
    body = await resolve_client(options).request_json(path, params=params)
    return unwrap_data(body, path)


@with_singleton
async def get_user_total_claimed_reward(address: str, options: dict | None = None) -> dict:
    path = "/api/navi/user/total_claimed_reward"
    body = await resolve_client(options).request_json(path, params={"userAddress": address})
    return unwrap_data(body, path)


@with_singleton
async def get_user_claimed_reward_history(address: str, options: dict | None = None) -> dict:
    options = options or {}
    params = {
        "userAddress": address,
        "page": options.get("page") or 1,
        "pageSize": options.get("size") or 400,
    }
    path = "/api/navi/user/rewards"
    data = unwrap_data(await resolve_client(options).request_json(path, params=params), path)
    return {"data": camelize(data["rewards"])}
