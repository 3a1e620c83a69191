# fandom_oracle/config.py
"""
Environment configuration for the enclave oracle.

Recognized variables:
  UPSTREAM_BASE_URL      MyAnimeList API root (default: production v2 endpoint)
  UPSTREAM_CLIENT_ID     primary credential, sent as X-MAL-CLIENT-ID
  UPSTREAM_BEARER_TOKEN  fallback credential, used only without a client id
  UPSTREAM_TIMEOUT_SECS  outbound request deadline
  CACHE_TTL_SECS         freshness window for signed envelopes
  ORACLE_HOST / ORACLE_PORT / LOG_LEVEL
"""

import os
from dataclasses import dataclass
from typing import Optional

# ── Defaults ──────────────────────────────────────────────────────────────────

DEFAULT_BASE_URL = "https://api.myanimelist.net/v2"
DEFAULT_TIMEOUT_SECS = 10.0
CACHE_TTL_SECS = 300  # 5 minutes
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def _env_or_none(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


@dataclass(frozen=True)
class OracleConfig:
    base_url: str = DEFAULT_BASE_URL
    client_id: Optional[str] = None
    bearer_token: Optional[str] = None
    timeout_secs: float = DEFAULT_TIMEOUT_SECS
    cache_ttl_secs: int = CACHE_TTL_SECS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "OracleConfig":
        return cls(
            base_url=os.environ.get("UPSTREAM_BASE_URL", DEFAULT_BASE_URL),
            client_id=_env_or_none("UPSTREAM_CLIENT_ID"),
            bearer_token=_env_or_none("UPSTREAM_BEARER_TOKEN"),
            timeout_secs=float(os.environ.get("UPSTREAM_TIMEOUT_SECS", DEFAULT_TIMEOUT_SECS)),
            cache_ttl_secs=int(os.environ.get("CACHE_TTL_SECS", CACHE_TTL_SECS)),
            host=os.environ.get("ORACLE_HOST", DEFAULT_HOST),
            port=int(os.environ.get("ORACLE_PORT", DEFAULT_PORT)),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
