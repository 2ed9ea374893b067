"""Tests for TTL caching of async calls."""

import inspect

import pytest

from navi_sdk.cache import with_cache
from tests.fakes import FakeClock


class Recorder:
    """Async callable that counts invocations and can be told to fail."""

    def __init__(self):
        self.calls = 0
        self.error: Exception | None = None

    async def __call__(self, x, options=None, **kwargs):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return {"x": x, "call": self.calls}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.mark.asyncio
async def test_entry_expires_after_cache_time(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)

    await wrapped(1, {"cache_time": 50})
    clock.advance_ms(100)
    await wrapped(1, {"cache_time": 50})

    assert recorder.calls == 2


@pytest.mark.asyncio
async def test_entry_within_cache_time_is_reused(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)

    first = await wrapped(1, {"cache_time": 50})
    clock.advance_ms(10)
    second = await wrapped(1, {"cache_time": 50})

    assert recorder.calls == 1
    assert second == first


@pytest.mark.asyncio
async def test_freshness_is_decided_by_each_caller(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)

    await wrapped(1, {"cache_time": 1000})
    clock.advance_ms(500)
    await wrapped(1, {"cache_time": 1000})
    await wrapped(1, {"cache_time": 100})

    assert recorder.calls == 2


@pytest.mark.asyncio
async def test_no_cache_time_means_entry_never_expires(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)

    first = await wrapped(7)
    clock.advance_ms(10**9)
    second = await wrapped(7)

    assert recorder.calls == 1
    assert second == first


@pytest.mark.asyncio
async def test_disable_cache_refreshes_and_stores(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)

    await wrapped(1)
    refreshed = await wrapped(1, {"disable_cache": True})
    after = await wrapped(1)

    assert recorder.calls == 2
    assert refreshed == {"x": 1, "call": 2}
    assert after == refreshed


@pytest.mark.asyncio
async def test_disable_cache_as_keyword(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)

    await wrapped(1)
    await wrapped(1, disable_cache=True)

    assert recorder.calls == 2


@pytest.mark.asyncio
async def test_failure_is_not_cached_and_keeps_previous_entry(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)
    cached = await wrapped(1, {"cache_time": 1000})

    recorder.error = RuntimeError("backend down")
    with pytest.raises(RuntimeError, match="backend down"):
        await wrapped(1, {"disable_cache": True})

    clock.advance_ms(100)
    assert await wrapped(1, {"cache_time": 1000}) == cached
    assert recorder.calls == 2

    with pytest.raises(RuntimeError):
        await wrapped(2)
    recorder.error = None
    assert await wrapped(2) == {"x": 2, "call": 4}


@pytest.mark.asyncio
async def test_none_results_are_cached(clock):
    calls = 0

    async def nothing():
        nonlocal calls
        calls += 1
        return None

    wrapped = with_cache(nothing, clock=clock)

    assert await wrapped() is None
    assert await wrapped() is None
    assert calls == 1


@pytest.mark.asyncio
async def test_hit_and_miss_both_return_awaitables(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)

    miss = wrapped(1)
    assert inspect.isawaitable(miss)
    await miss

    hit = wrapped(1)
    assert inspect.isawaitable(hit)
    assert await hit == {"x": 1, "call": 1}


@pytest.mark.asyncio
async def test_maxsize_evicts_oldest_written_entry(clock, recorder):
    wrapped = with_cache(recorder, maxsize=2, clock=clock)

    await wrapped(1)
    await wrapped(2)
    await wrapped(3)
    assert len(wrapped) == 2

    await wrapped(2)
    assert recorder.calls == 3

    await wrapped(1)
    assert recorder.calls == 4


def test_maxsize_must_be_positive(recorder):
    with pytest.raises(ValueError):
        with_cache(recorder, maxsize=0)


@pytest.mark.asyncio
async def test_cache_clear_drops_entries(clock, recorder):
    wrapped = with_cache(recorder, clock=clock)
    await wrapped(1)
    await wrapped(2)
    assert len(wrapped) == 2

    await wrapped.cache_clear()
    assert len(wrapped) == 0

    await wrapped(1)
    assert recorder.calls == 3


@pytest.mark.asyncio
async def test_wrappers_of_same_function_keep_separate_entries(clock, recorder):
    first = with_cache(recorder, clock=clock)
    second = with_cache(recorder, clock=clock)

    await first(1)
    await second(1)
    await first.cache_clear()
    await second(1)

    assert recorder.calls == 2
