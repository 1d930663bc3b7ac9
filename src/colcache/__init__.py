"""colcache: cache keys for columnar table artifacts.

Derives the keys under which a table's index files, global dictionaries and
bloom datamap shards are cached, for invalidation after table changes.
"""

from colcache.cache.deriver import CacheKeyDeriver
from colcache.cache.keys import BloomCacheKey, CacheType
from colcache.config import StorageConfig
from colcache.core.model import ColumnSchema, DataMapSchema, Encoding, TableMetadata
from colcache.core.segment import Segment

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BloomCacheKey",
    "CacheKeyDeriver",
    "CacheType",
    "ColumnSchema",
    "DataMapSchema",
    "Encoding",
    "Segment",
    "StorageConfig",
    "TableMetadata",
]
