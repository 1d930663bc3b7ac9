"""Cache key derivation for a table's on-disk artifacts.

Lists the keys under which index files, global dictionaries and bloom
datamap shards of a table may be cached, so that a table-management command
can evict them after an ALTER, DROP, compaction or refresh.

Example:
    deriver = CacheKeyDeriver(storage_config=settings.storage)

    keys = deriver.index_file_keys(table)
    keys += deriver.dictionary_keys(table)
    for datamap in table.bloom_datamaps:
        keys += deriver.bloom_cache_keys(table, datamap)

Every operation is a pure function of the table metadata and what storage
holds at call time. Collaborator errors propagate unchanged.
"""

from __future__ import annotations

import logging

from colcache.cache.keys import BloomCacheKey, CacheType, dictionary_cache_key
from colcache.cache.sources import ScopeFactory, segment_source_for
from colcache.config import StorageConfig
from colcache.core.model import DataMapSchema, TableMetadata
from colcache.storage.base import SegmentResolver, ShardPathEnumerator
from colcache.storage.latest_files import LatestFilesReadCommittedScope
from colcache.storage.shards import BloomShardPathEnumerator
from colcache.storage.table_status import SegmentStatusManager

logger = logging.getLogger(__name__)


class CacheKeyDeriver:
    """Derives cache keys from table metadata.

    Holds only its collaborators; no state is kept between calls.
    """

    def __init__(
        self,
        resolver: SegmentResolver | None = None,
        shard_enumerator: ShardPathEnumerator | None = None,
        storage_config: StorageConfig | None = None,
        scope_factory: ScopeFactory = LatestFilesReadCommittedScope,
    ):
        self.storage_config = storage_config or StorageConfig()
        self.resolver = resolver or SegmentStatusManager(self.storage_config)
        self.shard_enumerator = shard_enumerator or BloomShardPathEnumerator(self.storage_config)
        self.scope_factory = scope_factory

    def index_file_keys(self, table: TableMetadata) -> list[str]:
        """List every committed index file of the table's segments."""
        source = segment_source_for(
            table, self.resolver, self.storage_config, self.scope_factory
        )
        keys = [
            index_file
            for segment in source.segments()
            for index_file in segment.committed_index_files()
        ]
        logger.debug(f"Derived {len(keys)} index file keys for {table.qualified_name}")
        return keys

    def dictionary_keys(self, table: TableMetadata) -> list[str]:
        """List forward and reverse dictionary keys of dictionary-encoded dimensions."""
        keys = [
            dictionary_cache_key(column.column_id, cache_type)
            for column in table.dimensions
            if column.is_global_dictionary_encoding
            for cache_type in (CacheType.FORWARD_DICTIONARY, CacheType.REVERSE_DICTIONARY)
        ]
        logger.debug(f"Derived {len(keys)} dictionary keys for {table.qualified_name}")
        return keys

    def bloom_cache_keys(self, table: TableMetadata, datamap: DataMapSchema) -> list[str]:
        """List the bloom filter keys of a datamap, shard path major.

        Segments always come from the resolver, also for non-transactional
        tables.
        """
        shard_paths = [
            shard_path
            for segment in self.resolver.valid_segments(table.identifier)
            for shard_path in self.shard_enumerator.shard_paths(
                table.table_path, segment.segment_no, datamap.datamap_name
            )
        ]
        index_columns = [column.column_name for column in table.indexed_columns(datamap)]

        keys = [
            str(BloomCacheKey(shard_path, index_column))
            for shard_path in shard_paths
            for index_column in index_columns
        ]
        logger.debug(
            f"Derived {len(keys)} bloom keys for {table.qualified_name}."
            f"{datamap.datamap_name} ({len(shard_paths)} shards)"
        )
        return keys

    def all_keys(self, table: TableMetadata) -> list[str]:
        """Index file, dictionary and bloom keys of a table, in that order."""
        keys = self.index_file_keys(table)
        keys.extend(self.dictionary_keys(table))
        for datamap in table.bloom_datamaps:
            keys.extend(self.bloom_cache_keys(table, datamap))
        return keys
