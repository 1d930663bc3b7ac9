"""Bloom datamap shard discovery.

Each segment stores a datamap under ``Segment_{no}/{datamap}/``; every
sub-directory is one shard. Once shards are merged, a single ``mergeShard``
directory replaces them, unless the merge is still in progress.
"""

from __future__ import annotations

from colcache.config import StorageConfig
from colcache.storage.base import ShardPathEnumerator
from colcache.storage.paths import TablePath


class BloomShardPathEnumerator(ShardPathEnumerator):
    """Lists bloom datamap shards on the local filesystem."""

    def __init__(self, config: StorageConfig):
        self.config = config

    def shard_paths(self, table_path: str, segment_no: str, datamap_name: str) -> list[str]:
        store_dir = TablePath(table_path, self.config).datamap_store_dir(segment_no, datamap_name)
        if not store_dir.is_dir():
            return []

        shard_paths: list[str] = []
        merge_shard: str | None = None
        merge_in_progress = False
        for entry in sorted(store_dir.iterdir()):
            if entry.name == self.config.merge_shard_name:
                merge_shard = str(entry)
            elif entry.name == self.config.merge_shard_inprogress:
                merge_in_progress = True
            elif entry.is_dir():
                shard_paths.append(str(entry))

        # A completed merge shard supersedes the individual shards
        if merge_shard is not None and not merge_in_progress:
            return [merge_shard]
        return shard_paths
