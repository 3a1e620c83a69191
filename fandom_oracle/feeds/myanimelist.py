# fandom_oracle/feeds/myanimelist.py
"""
MyAnimeList Feed - best-match anime metrics
Source: MyAnimeList API v2, GET /anime

Only transport failures, non-2xx statuses and unparseable bodies fail a fetch.
Each extracted field defaults independently when missing or malformed:
  title -> "", mean -> 0.0, popularity -> 0, num_list_users -> 0
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from fandom_oracle.errors import ConfigError, DecodeError, TransportError, UpstreamError

RESULT_LIMIT = 1
FIELDS = "mean,popularity,num_list_users"
CLIENT_ID_HEADER = "X-MAL-CLIENT-ID"
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricRecord:
    title: str
    external_average_rating: float
    external_popularity_rank: int
    external_member_count: int
    queried_name: str


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        result = float(value)
    except OverflowError:
        return 0.0
    return result if math.isfinite(result) else 0.0


def _as_int(value: Any) -> int:
    # Signed as i64; floats and out-of-range integers are malformed.
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value if I64_MIN <= value <= I64_MAX else 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def first_node(body: Dict[str, Any]) -> Dict[str, Any]:
    """Return body["data"][0]["node"], or {} if any level is absent."""
    data = body.get("data")
    if not isinstance(data, list) or not data:
        return {}
    first = data[0]
    if not isinstance(first, dict):
        return {}
    node = first.get("node")
    return node if isinstance(node, dict) else {}


def to_metric_record(body: Dict[str, Any], queried_name: str) -> MetricRecord:
    node = first_node(body)
    return MetricRecord(
        title=_as_str(node.get("title")),
        external_average_rating=_as_float(node.get("mean")),
        external_popularity_rank=_as_int(node.get("popularity")),
        external_member_count=_as_int(node.get("num_list_users")),
        queried_name=queried_name,
    )


class MyAnimeListFeed:
    namespace = "mal"
    record_type = MetricRecord

    def __init__(
        self,
        base_url: str,
        client_id: Optional[str] = None,
        bearer_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.client_id = client_id
        self.bearer_token = bearer_token
        self.timeout = timeout
        self._transport = transport

    def search_url(self) -> httpx.URL:
        try:
            url = httpx.URL(f"{self.base_url.rstrip('/')}/anime")
        except httpx.InvalidURL as e:
            raise ConfigError(f"invalid UPSTREAM_BASE_URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigError(f"invalid UPSTREAM_BASE_URL: {self.base_url!r}")
        return url

    @property
    def upstream_host(self) -> str:
        try:
            return self.search_url().host
        except ConfigError:
            return self.base_url

    def auth_headers(self) -> Dict[str, str]:
        # Client id wins; the bearer token is only a fallback.
        if self.client_id:
            return {CLIENT_ID_HEADER: self.client_id}
        if self.bearer_token:
            return {"Authorization": f"Bearer {self.bearer_token}"}
        return {}

    async def fetch(self, query: str) -> MetricRecord:
        url = self.search_url()
        params = {"q": query, "limit": str(RESULT_LIMIT), "fields": FIELDS}

        log.info(f"Querying MyAnimeList for {query!r}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(url, params=params, headers=self.auth_headers())
        except httpx.InvalidURL as e:
            raise ConfigError(f"invalid UPSTREAM_BASE_URL: {e}") from e
        except httpx.TransportError as e:
            log.warning(f"MyAnimeList transport error: {e}")
            raise TransportError(f"Failed to request MyAnimeList: {e}") from e

        if not resp.is_success:
            log.warning(f"MyAnimeList returned status {resp.status_code}")
            raise UpstreamError(resp.status_code)

        try:
            body = resp.json()
        except ValueError as e:
            raise DecodeError(f"Failed to parse MyAnimeList JSON: {e}") from e
        if not isinstance(body, dict):
            raise DecodeError(f"Failed to parse MyAnimeList JSON: expected object, got {type(body).__name__}")

        return to_metric_record(body, query)

    async def is_reachable(self) -> bool:
        """Best-effort reachability check of the upstream host."""
        try:
            url = self.search_url()
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                await client.get(url, params={"q": "", "limit": "1"}, headers=self.auth_headers())
            return True
        except (ConfigError, httpx.HTTPError) as e:
            log.warning(f"MyAnimeList reachability check failed: {e}")
            return False
