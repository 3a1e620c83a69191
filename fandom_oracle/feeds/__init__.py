# fandom_oracle/feeds/__init__.py
"""
Upstream data sources. Each feed exposes:

  namespace    cache-key prefix for the source
  record_type  dataclass returned by fetch()
  fetch(query) coroutine returning one normalized record
"""

from fandom_oracle.feeds.myanimelist import MetricRecord, MyAnimeListFeed

__all__ = ["MetricRecord", "MyAnimeListFeed"]
