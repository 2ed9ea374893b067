"""
Request memoization for async SDK calls.

Every network-calling function of the SDK is wrapped twice:

- `with_singleton` coalesces concurrent calls that share a cache key into a
  single underlying call.
- `with_cache` keeps the last successful result per key and serves it while
  it is fresh.

`memoized` stacks both in the order the SDK relies on (singleton inside,
cache outside):

    @memoized
    async def get_pools(options=None): ...

    pools = await get_pools({"env": "prod", "cache_time": 60_000})

Options are read from a trailing dict argument or from keyword arguments.
`disable_cache` and `cache_time` (milliseconds) control the cache, and
neither they nor the `client` handle take part in the cache key.
The JavaScript SDK spells these `disableCache` and `cacheTime`; only the
snake_case names are recognized here.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

from aiocache import Cache
from pydantic import BaseModel

logger = logging.getLogger("navi_sdk.cache")

CACHE_CONTROL_FIELDS = frozenset({"disable_cache", "cache_time", "client"})

AsyncFn = Callable[..., Awaitable[Any]]
Clock = Callable[[], float]


def _strip_options(options: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in options.items() if k not in CACHE_CONTROL_FIELDS}


def _callable_name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "_name", None) or repr(fn)


def _encode(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Cannot derive a cache key from {type(value).__name__}")


def derive_key(args: tuple | list, kwargs: Mapping[str, Any] | None = None) -> str:
    """
    Build the cache key for a call.

    A trailing dict argument and the keyword arguments are the call's options.
    Cache-control fields are removed from copies of them, and an options
    object left empty is dropped, so `f(x)`, `f(x, {})` and
    `f(x, {"disable_cache": True})` all share one key.

    Args:
        args: Positional arguments of the call.
        kwargs: Keyword arguments of the call.

    Returns:
        str: Canonical JSON of the remaining arguments.

    Raises:
        TypeError: If an argument is not JSON-serializable.
    """
    positional = list(args)
    if positional and isinstance(positional[-1], dict):
        trailing = _strip_options(positional[-1])
        if trailing:
            positional[-1] = trailing
        else:
            positional.pop()

    keywords = _strip_options(kwargs or {})
    payload: list[Any] = [positional]
    if keywords:
        payload.append(keywords)

    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=_encode)


def call_options(args: tuple | list, kwargs: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a trailing options dict with keyword options (keywords win)."""
    options: dict[str, Any] = {}
    if args and isinstance(args[-1], dict):
        options.update(args[-1])
    options.update(kwargs)
    return options


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: Any
    stored_at: float


class SingletonCall:
    """
    Runs at most one underlying call per cache key at any instant.

    Callers arriving while a call for their key is in flight await that same
    call. The slot is released once the call settles, whether it succeeded
    or failed, so a failure never blocks later attempts.
    """

    def __init__(self, fn: AsyncFn):
        functools.update_wrapper(self, fn, updated=())
        self._fn = fn
        self._name = _callable_name(fn)
        self._in_flight: dict[str, asyncio.Task] = {}

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def __call__(self, *args, **kwargs):
        key = derive_key(args, kwargs)
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fn(*args, **kwargs))
            self._in_flight[key] = task
            task.add_done_callback(functools.partial(self._release, key))
        else:
            logger.debug(f"Joining in-flight call {self._name}{key}")

        # One caller being cancelled must not cancel the call for the rest.
        return await asyncio.shield(task)

    def _release(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]


class CachedCall:
    """
    Serves the last successful result per cache key while it is fresh.

    An entry is fresh when the caller gives no `cache_time`, or when it is
    younger than `cache_time` milliseconds. `disable_cache=True` forces a
    call but the result is still stored. Failed calls store nothing.

    Entries are kept in an aiocache memory backend under a namespace private
    to this wrapper. Without `maxsize` the cache is unbounded; with it, the
    least recently written key is evicted first.
    """

    def __init__(
        self,
        fn: AsyncFn,
        *,
        maxsize: int | None = None,
        clock: Clock = time.monotonic,
    ):
        if maxsize is not None and maxsize < 1:
            raise ValueError(f"maxsize must be at least 1: {maxsize}")

        functools.update_wrapper(self, fn, updated=())
        self._fn = fn
        self._name = _callable_name(fn)
        self._maxsize = maxsize
        self._clock = clock
        self._namespace = f"{self._name}:{uuid.uuid4().hex}:"
        self._store = Cache(Cache.MEMORY, namespace=self._namespace, timeout=None)
        self._keys: OrderedDict[str, None] = OrderedDict()

    def __len__(self) -> int:
        return len(self._keys)

    async def __call__(self, *args, **kwargs):
        options = call_options(args, kwargs)
        key = derive_key(args, kwargs)

        if not options.get("disable_cache"):
            entry = await self._store.get(key)
            if entry is not None and self._is_fresh(entry, options.get("cache_time")):
                logger.debug(f"Cache HIT for {self._name}{key}")
                return entry.value

        logger.debug(f"Cache MISS for {self._name}{key}")
        value = await self._fn(*args, **kwargs)
        await self._put(key, CacheEntry(value=value, stored_at=self._clock()))
        return value

    def _is_fresh(self, entry: CacheEntry, cache_time: float | None) -> bool:
        if cache_time is None:
            return True
        age_ms = (self._clock() - entry.stored_at) * 1000
        return age_ms < cache_time

    async def _put(self, key: str, entry: CacheEntry) -> None:
        await self._store.set(key, entry)
        self._keys[key] = None
        self._keys.move_to_end(key)

        if self._maxsize is None:
            return
        while len(self._keys) > self._maxsize:
            oldest, _ = self._keys.popitem(last=False)
            await self._store.delete(oldest)
            logger.debug(f"Evicted {self._name}{oldest}")

    async def cache_clear(self) -> None:
        """Drop every stored entry of this wrapper."""
        await self._store.clear(namespace=self._namespace)
        self._keys.clear()


def with_singleton(fn: AsyncFn) -> SingletonCall:
    return SingletonCall(fn)


def with_cache(
    fn: AsyncFn,
    *,
    maxsize: int | None = None,
    clock: Clock = time.monotonic,
) -> CachedCall:
    return CachedCall(fn, maxsize=maxsize, clock=clock)


def memoized(
    fn: AsyncFn | None = None,
    *,
    maxsize: int | None = None,
    clock: Clock = time.monotonic,
):
    """
    Decorator applying `with_singleton` then `with_cache`.

    Concurrent callers on a cache miss share one underlying call, and later
    callers within the freshness window get the stored result without any
    call at all.

    Example:
        @memoized
        async def get_stats(options=None): ...

        @memoized(maxsize=256)
        async def get_rewards(address, options=None): ...
    """

    def decorator(inner: AsyncFn) -> CachedCall:
        return with_cache(with_singleton(inner), maxsize=maxsize, clock=clock)

    if fn is not None:
        return decorator(fn)
    return decorator
