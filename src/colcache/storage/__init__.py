"""Storage collaborators for key derivation.

Provides read-only access to table storage:
- Valid segment resolution from the table status file
- Latest-files scan for non-transactional tables
- Bloom datamap shard listing
"""

from colcache.storage.base import ReadCommittedScope, SegmentResolver, ShardPathEnumerator
from colcache.storage.latest_files import LatestFilesReadCommittedScope
from colcache.storage.paths import TablePath
from colcache.storage.shards import BloomShardPathEnumerator
from colcache.storage.table_status import (
    SegmentStatusManager,
    TableStatusReadCommittedScope,
    read_table_status,
)

__all__ = [
    # Interfaces
    "ReadCommittedScope",
    "SegmentResolver",
    "ShardPathEnumerator",
    # Filesystem implementations
    "BloomShardPathEnumerator",
    "LatestFilesReadCommittedScope",
    "SegmentStatusManager",
    "TablePath",
    "TableStatusReadCommittedScope",
    "read_table_status",
]
