"""Segment sources for index file key derivation.

A table's segments come from one of two places, chosen once per call:
- Transactional tables: the valid segments recorded in the table status
- Non-transactional tables: a fresh latest-files scan of the table path
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

from colcache.config import StorageConfig
from colcache.core.model import AbsoluteTableIdentifier, TableMetadata
from colcache.core.segment import Segment
from colcache.storage.base import ReadCommittedScope, SegmentResolver
from colcache.storage.latest_files import LatestFilesReadCommittedScope

ScopeFactory = Callable[[str, StorageConfig], ReadCommittedScope]


class SegmentSource(ABC):
    """Yields the segments whose committed index files form a table's keys."""

    @abstractmethod
    def segments(self) -> Iterable[Segment]: ...


class CommittedSegmentSource(SegmentSource):
    """Valid segments as resolved from commit metadata."""

    def __init__(self, resolver: SegmentResolver, identifier: AbsoluteTableIdentifier):
        self.resolver = resolver
        self.identifier = identifier

    def segments(self) -> Iterable[Segment]:
        return self.resolver.valid_segments(self.identifier)


class ReadCommittedScopeSource(SegmentSource):
    """Loads reported by a read committed scope built over the table path."""

    def __init__(
        self,
        table_path: str,
        storage_config: StorageConfig,
        scope_factory: ScopeFactory = LatestFilesReadCommittedScope,
    ):
        self.table_path = table_path
        self.storage_config = storage_config
        self.scope_factory = scope_factory

    def segments(self) -> Iterable[Segment]:
        scope = self.scope_factory(self.table_path, self.storage_config)
        return [Segment(load.load_name, None, scope) for load in scope.get_segment_list()]


def segment_source_for(
    table: TableMetadata,
    resolver: SegmentResolver,
    storage_config: StorageConfig,
    scope_factory: ScopeFactory = LatestFilesReadCommittedScope,
) -> SegmentSource:
    """Pick the segment source matching the table's mode."""
    if table.is_transactional_table:
        return CommittedSegmentSource(resolver, table.identifier)
    return ReadCommittedScopeSource(table.table_path, storage_config, scope_factory)
