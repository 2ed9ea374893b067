import pytest
import pytest_asyncio
from tenacity import wait_none

from navi_sdk import aggregator
from navi_sdk import lending
from navi_sdk.client import NaviClient
from navi_sdk.config import NaviSettings
from tests.fakes import MockTransport

MEMOIZED_CALLS = [
    lending.get_config,
    lending.get_pools,
    lending.get_stats,
    lending.get_fees,
    lending.get_flashloan_assets,
    aggregator.get_positive_slippage_setting,
]


@pytest_asyncio.fixture(autouse=True)
async def clear_sdk_caches():
    """Module-level API functions keep process-wide caches; isolate tests."""
    for call in MEMOIZED_CALLS:
        await call.cache_clear()
    yield
    for call in MEMOIZED_CALLS:
        await call.cache_clear()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> NaviSettings:
    monkeypatch.delenv("NAVI_ENV", raising=False)
    return NaviSettings(base_url="https://api.test", env="prod", retry_attempts=3)


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def client(settings: NaviSettings, transport: MockTransport) -> NaviClient:
    return NaviClient(settings, transport=transport, retry_wait=wait_none())
