"""Drop cached table artifacts from Redis.

Backs DROP CACHE and table refresh handling: derives every key a table's
artifacts may be cached under and deletes them from the shared cache.

Example:
    client = await get_redis()
    invalidator = TableCacheInvalidator(client, CacheKeyDeriver(storage_config=settings.storage))

    removed = await invalidator.drop_table_cache(table)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import redis.asyncio as redis

from colcache.cache.deriver import CacheKeyDeriver
from colcache.config import settings
from colcache.core.model import DataMapSchema, TableMetadata
from colcache.observability.logging import LogContext

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

# Module-level client
_redis_client: Redis | None = None


async def get_redis() -> Redis:
    """Get or create the Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(  # type: ignore[no-untyped-call]
            settings.redis_url,
            encoding="utf-8",
            decode_responses=False,
        )
    return _redis_client


async def close_redis() -> None:
    """Close Redis connections."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None


class TableCacheInvalidator:
    """Deletes the cache entries of a table's artifacts."""

    def __init__(
        self,
        client: Redis,
        deriver: CacheKeyDeriver,
        prefix: str | None = None,
        batch_size: int | None = None,
    ):
        self.client = client
        self.deriver = deriver
        self.prefix = settings.cache_key_prefix if prefix is None else prefix
        self.batch_size = batch_size or settings.invalidation_batch_size

    def namespaced(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    async def drop_table_cache(self, table: TableMetadata) -> int:
        """Delete every cached artifact of a table.

        Returns:
            Number of keys Redis reported as deleted
        """
        with LogContext(table=table.qualified_name):
            keys = self.deriver.all_keys(table)
            removed = await self._delete(keys)
            logger.info(f"Dropped {removed} of {len(keys)} cache entries")
        return removed

    async def drop_datamap_cache(self, table: TableMetadata, datamap: DataMapSchema) -> int:
        """Delete the cached bloom filters of one datamap."""
        with LogContext(table=table.qualified_name):
            keys = self.deriver.bloom_cache_keys(table, datamap)
            removed = await self._delete(keys)
            logger.info(
                f"Dropped {removed} of {len(keys)} cache entries "
                f"for datamap {datamap.datamap_name}"
            )
        return removed

    async def _delete(self, keys: list[str]) -> int:
        if not keys:
            return 0

        namespaced = [self.namespaced(key) for key in keys]
        async with self.client.pipeline() as pipe:
            for start in range(0, len(namespaced), self.batch_size):
                pipe.delete(*namespaced[start : start + self.batch_size])
            results = await pipe.execute()
        return sum(int(count) for count in results)
