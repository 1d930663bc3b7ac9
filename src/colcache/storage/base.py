"""Storage collaborator interfaces.

Defines how key derivation reaches table storage: which loads exist, which
index files each load committed, and where bloom datamap shards live.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from colcache.core.model import AbsoluteTableIdentifier, LoadMetadataDetails
    from colcache.core.segment import Segment


class ReadCommittedScope(ABC):
    """A consistent view of the loads committed to a table."""

    @abstractmethod
    def get_segment_list(self) -> list[LoadMetadataDetails]:
        """Return the loads visible in this scope.

        Returns:
            Load details in a stable order
        """
        ...

    @abstractmethod
    def get_committed_index_files(self, segment: Segment) -> dict[str, str | None]:
        """Return the committed index files of a segment.

        Args:
            segment: Segment belonging to this scope

        Returns:
            Mapping of index file path to its merge-index file path (or None)
        """
        ...


class SegmentResolver(ABC):
    """Resolves the valid segments of a transactional table."""

    @abstractmethod
    def valid_segments(self, identifier: AbsoluteTableIdentifier) -> list[Segment]:
        """Return the segments currently valid for queries.

        Args:
            identifier: Table to resolve

        Returns:
            Segments bound to a read committed scope, in load order
        """
        ...


class ShardPathEnumerator(ABC):
    """Lists the physical shards of a secondary index within a segment."""

    @abstractmethod
    def shard_paths(self, table_path: str, segment_no: str, datamap_name: str) -> list[str]:
        """Return the shard paths of a datamap in one segment.

        Args:
            table_path: Table location
            segment_no: Segment id
            datamap_name: Datamap (secondary index) name

        Returns:
            Shard paths; empty if the segment holds no shard for the datamap
        """
        ...
