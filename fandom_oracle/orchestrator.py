# fandom_oracle/orchestrator.py
"""
Oracle orchestrator: validate -> normalize key -> cache lookup -> fetch -> sign -> cache.

A fresh cache hit returns the stored envelope unchanged, so repeated identical
queries inside the TTL window get byte-identical signed envelopes. A failed
fetch never touches the cache.
"""

import logging
import time
from typing import Callable

from fandom_oracle.cache import FreshnessCache
from fandom_oracle.errors import InvalidInput
from fandom_oracle.intent import IntentScope, SignedEnvelope
from fandom_oracle.signer import IntentSigner

log = logging.getLogger(__name__)


def current_millis() -> int:
    return time.time_ns() // 1_000_000


def normalize_key(namespace: str, query: str) -> str:
    return f"{namespace}:{query.strip().lower()}"


class OracleOrchestrator:
    def __init__(
        self,
        cache: FreshnessCache,
        fetcher,
        signer: IntentSigner,
        clock_ms: Callable[[], int] = current_millis,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.signer = signer
        self._clock_ms = clock_ms

    async def process_data(self, query: str) -> SignedEnvelope:
        name = query.strip()
        if not name:
            raise InvalidInput("name required")

        key = normalize_key(self.fetcher.namespace, name)

        hit = self.cache.lookup(key)
        if hit is not None:
            age, cached = hit
            log.debug(f"Cache hit {key} (age {age:.1f}s)")
            return SignedEnvelope.from_json(cached, self.fetcher.record_type)

        log.debug(f"Cache miss {key}")
        record = await self.fetcher.fetch(name)

        timestamp_ms = self._clock_ms()
        signed = self.signer.sign(record, timestamp_ms, IntentScope.PROCESS_DATA)
        self.cache.insert(key, signed.to_json())
        log.info(f"Signed {key} at {timestamp_ms}")
        return signed
