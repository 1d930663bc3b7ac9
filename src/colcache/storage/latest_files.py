"""Read committed scope for non-transactional tables.

Non-transactional tables have no table status file: files are written
directly under the table path by external writers. A load is every index
file sharing the same timestamp suffix, and whatever index files exist when
the scope is created are considered committed.
"""

from __future__ import annotations

import logging
import os

from colcache.config import StorageConfig
from colcache.core.model import LoadMetadataDetails, SegmentStatus
from colcache.core.segment import Segment
from colcache.errors import TablePathNotFoundError
from colcache.storage.base import ReadCommittedScope
from colcache.storage.paths import is_index_file, segment_id_from_file_name

logger = logging.getLogger(__name__)


def _load_order(segment_ids: list[str]) -> list[str]:
    if all(segment_id.isdigit() for segment_id in segment_ids):
        return sorted(segment_ids, key=int)
    return sorted(segment_ids)


class LatestFilesReadCommittedScope(ReadCommittedScope):
    """Snapshot of the index files currently present under a table path."""

    def __init__(self, table_path: str, config: StorageConfig):
        self.table_path = table_path
        self.config = config
        self._index_files = self._take_snapshot()

    def _take_snapshot(self) -> dict[str, dict[str, str | None]]:
        if not os.path.isdir(self.table_path):
            raise TablePathNotFoundError(self.table_path)

        snapshot: dict[str, dict[str, str | None]] = {}
        for dirpath, dirnames, filenames in os.walk(self.table_path):
            dirnames.sort()
            for name in sorted(filenames):
                if not is_index_file(name, self.config):
                    continue
                segment_id = segment_id_from_file_name(name, self.config)
                snapshot.setdefault(segment_id, {})[os.path.join(dirpath, name)] = None

        logger.debug(f"Found {len(snapshot)} loads under {self.table_path}")
        return snapshot

    def get_segment_list(self) -> list[LoadMetadataDetails]:
        return [
            LoadMetadataDetails(load_name=segment_id, load_status=SegmentStatus.SUCCESS)
            for segment_id in _load_order(list(self._index_files))
        ]

    def get_committed_index_files(self, segment: Segment) -> dict[str, str | None]:
        return dict(self._index_files.get(segment.segment_no, {}))
