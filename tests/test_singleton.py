"""Tests for in-flight call coalescing."""

import asyncio

import pytest

from navi_sdk.cache import with_singleton


@pytest.mark.asyncio
async def test_concurrent_identical_calls_share_one_invocation():
    calls = 0

    async def slow_double(x):
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.5)
        return x * 2

    wrapped = with_singleton(slow_double)

    first = asyncio.ensure_future(wrapped(21))
    await asyncio.sleep(0.1)
    second = asyncio.ensure_future(wrapped(21, {}))

    assert await first == 42
    assert await second == 42
    assert calls == 1


@pytest.mark.asyncio
async def test_different_keys_run_separately():
    calls = []

    async def echo(x, options=None):
        calls.append(x)
        await asyncio.sleep(0.01)
        return x

    wrapped = with_singleton(echo)
    results = await asyncio.gather(wrapped(1), wrapped(2), wrapped(1, {"env": "dev"}))

    assert results == [1, 2, 1]
    assert sorted(calls) == [1, 1, 2]


@pytest.mark.asyncio
async def test_settled_calls_are_not_reused():
    calls = 0

    async def fetch():
        nonlocal calls
        calls += 1
        return calls

    wrapped = with_singleton(fetch)

    assert await wrapped() == 1
    assert await wrapped() == 2
    assert wrapped.in_flight == 0


@pytest.mark.asyncio
async def test_failure_reaches_every_caller_and_clears_the_slot():
    calls = 0

    async def flaky():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        if calls == 1:
            raise RuntimeError("boom")
        return "ok"

    wrapped = with_singleton(flaky)
    results = await asyncio.gather(wrapped(), wrapped(), return_exceptions=True)

    assert calls == 1
    assert all(isinstance(r, RuntimeError) and str(r) == "boom" for r in results)
    assert wrapped.in_flight == 0

    assert await wrapped() == "ok"
    assert calls == 2


@pytest.mark.asyncio
async def test_cancelled_caller_does_not_cancel_shared_call():
    release = asyncio.Event()

    async def fetch():
        await release.wait()
        return "value"

    wrapped = with_singleton(fetch)
    impatient = asyncio.ensure_future(wrapped())
    patient = asyncio.ensure_future(wrapped())
    await asyncio.sleep(0)

    impatient.cancel()
    with pytest.raises(asyncio.CancelledError):
        await impatient

    release.set()
    assert await patient == "value"


@pytest.mark.asyncio
async def test_in_flight_counts_outstanding_keys():
    release = asyncio.Event()

    async def fetch(x):
        await release.wait()
        return x

    wrapped = with_singleton(fetch)
    pending = [asyncio.ensure_future(wrapped(x)) for x in (1, 1, 2)]
    await asyncio.sleep(0)

    assert wrapped.in_flight == 2

    release.set()
    assert await asyncio.gather(*pending) == [1, 1, 2]
    assert wrapped.in_flight == 0


@pytest.mark.asyncio
async def test_wrappers_do_not_share_state():
    release = asyncio.Event()

    async def a(x):
        await release.wait()
        return ("a", x)

    async def b(x):
        await release.wait()
        return ("b", x)

    wrapped_a, wrapped_b = with_singleton(a), with_singleton(b)
    pending = asyncio.gather(wrapped_a(1), wrapped_b(1))
    await asyncio.sleep(0)
    release.set()

    assert await pending == [("a", 1), ("b", 1)]


def test_wrapper_keeps_function_metadata():
    async def get_pools(options=None):
        """Fetch pools."""

    wrapped = with_singleton(get_pools)

    assert wrapped.__name__ == "get_pools"
    assert wrapped.__doc__ == "Fetch pools."
    assert wrapped.__wrapped__ is get_pools
