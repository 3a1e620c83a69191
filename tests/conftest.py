import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from fandom_oracle.cache import FreshnessCache
from fandom_oracle.config import OracleConfig
from fandom_oracle.feeds.myanimelist import MetricRecord
from fandom_oracle.orchestrator import OracleOrchestrator
from fandom_oracle.server import create_app
from fandom_oracle.signer import IntentSigner

TTL = 300


class FakeClock:
    """Wall clock the tests can move forward by hand."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def ms(self) -> int:
        return int(self.now * 1000)

    def advance(self, secs: float):
        self.now += secs


class FakeFeed:
    """Stands in for the MyAnimeList feed; counts upstream calls."""

    namespace = "mal"
    record_type = MetricRecord
    upstream_host = "api.myanimelist.net"

    def __init__(self):
        self.calls = []
        self.fail_with = None

    async def fetch(self, query: str) -> MetricRecord:
        self.calls.append(query)
        if self.fail_with is not None:
            raise self.fail_with
        return MetricRecord(
            title=query.title(),
            external_average_rating=8.5,
            external_popularity_rank=12,
            external_member_count=2_900_000,
            queried_name=query,
        )

    async def is_reachable(self) -> bool:
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def feed():
    return FakeFeed()


@pytest.fixture
def signer():
    return IntentSigner()


@pytest.fixture
def cache(clock):
    return FreshnessCache(ttl_secs=TTL, clock=clock)


@pytest.fixture
def orchestrator(cache, feed, signer, clock):
    return OracleOrchestrator(cache=cache, fetcher=feed, signer=signer, clock_ms=clock.ms)


# Client
@pytest_asyncio.fixture(scope="function")
async def client(cache, feed, signer):
    app = create_app(config=OracleConfig(), fetcher=feed, signer=signer, cache=cache)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
