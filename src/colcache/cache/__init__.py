"""Cache key layer for colcache.

- Key formats for index files, dictionaries and bloom shards
- Segment sources for transactional and non-transactional tables
- CacheKeyDeriver composing storage collaborators into key lists
- Redis-backed drop of a table's cached artifacts
"""

from colcache.cache.deriver import CacheKeyDeriver
from colcache.cache.invalidation import TableCacheInvalidator, close_redis, get_redis
from colcache.cache.keys import KEY_SEPARATOR, BloomCacheKey, CacheType, dictionary_cache_key
from colcache.cache.sources import (
    CommittedSegmentSource,
    ReadCommittedScopeSource,
    SegmentSource,
    segment_source_for,
)

__all__ = [
    # Key formats
    "KEY_SEPARATOR",
    "BloomCacheKey",
    "CacheType",
    "dictionary_cache_key",
    # Derivation
    "CacheKeyDeriver",
    "CommittedSegmentSource",
    "ReadCommittedScopeSource",
    "SegmentSource",
    "segment_source_for",
    # Invalidation
    "TableCacheInvalidator",
    "close_redis",
    "get_redis",
]
