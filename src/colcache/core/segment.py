from __future__ import annotations

from typing import TYPE_CHECKING

from colcache.errors import SegmentResolutionError

if TYPE_CHECKING:
    from colcache.storage.base import ReadCommittedScope


class Segment:
    """One load of a table, bound to the scope that knows its committed files."""

    def __init__(
        self,
        segment_no: str,
        segment_file_name: str | None = None,
        read_committed_scope: ReadCommittedScope | None = None,
    ):
        self.segment_no = segment_no
        self.segment_file_name = segment_file_name
        self.read_committed_scope = read_committed_scope

    def committed_index_files(self) -> dict[str, str | None]:
        """Map each committed index file to its merge-index file, if any."""
        if self.read_committed_scope is None:
            raise SegmentResolutionError(
                f"Segment {self.segment_no} is not bound to a read committed scope"
            )
        return self.read_committed_scope.get_committed_index_files(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.segment_no == other.segment_no

    def __hash__(self) -> int:
        return hash(self.segment_no)

    def __repr__(self) -> str:
        return f"Segment({self.segment_no!r}, {self.segment_file_name!r})"
