"""Cache key formats for table artifacts.

Three disjoint formats:
- Index file: the index file path itself
- Dictionary: {column_id}_{cache_type_name}
- Bloom: CacheKey{shardPath='{shard_path}', indexColumn='{column_name}'}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

KEY_SEPARATOR = "_"


class CacheType(str, Enum):
    """Dictionary cache directions, valued by their canonical cache name."""

    FORWARD_DICTIONARY = "FORWARD"
    REVERSE_DICTIONARY = "REVERSE"

    @property
    def cache_name(self) -> str:
        return self.value


def dictionary_cache_key(column_id: str, cache_type: CacheType) -> str:
    """Key for one direction of a column's global dictionary."""
    return f"{column_id}{KEY_SEPARATOR}{cache_type.cache_name}"


@dataclass(frozen=True)
class BloomCacheKey:
    """Identifies the bloom filter of one index column within one shard."""

    shard_path: str
    index_column: str

    def __str__(self) -> str:
        return f"CacheKey{{shardPath='{self.shard_path}', indexColumn='{self.index_column}'}}"
