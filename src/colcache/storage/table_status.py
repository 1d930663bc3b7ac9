"""Segment resolution for transactional tables.

Transactional tables record every load in ``Metadata/tablestatus`` (a JSON
array of load entries). Loads written by newer engines also reference a
segment file listing the index files they committed; older loads are
resolved by listing the segment directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from colcache.config import StorageConfig
from colcache.core.model import (
    AbsoluteTableIdentifier,
    LoadMetadataDetails,
    SegmentFile,
    SegmentStatus,
)
from colcache.core.segment import Segment
from colcache.errors import TableStatusError
from colcache.observability.logging import LogContext
from colcache.storage.base import ReadCommittedScope, SegmentResolver
from colcache.storage.paths import TablePath, is_index_file

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        return orjson.loads(path.read_bytes())
    except OSError as e:
        raise TableStatusError(str(path), e.strerror or str(e)) from e
    except orjson.JSONDecodeError as e:
        raise TableStatusError(str(path), f"invalid JSON: {e}") from e


def read_table_status(table_path: TablePath) -> list[LoadMetadataDetails]:
    """Read the load entries of a table.

    A table without a status file has no loads yet.
    """
    status_file = table_path.table_status_file
    if not status_file.exists():
        logger.debug(f"No table status file at {status_file}")
        return []

    data = _read_json(status_file)
    if not isinstance(data, list):
        raise TableStatusError(str(status_file), "expected a JSON array of loads")

    try:
        return [LoadMetadataDetails.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise TableStatusError(str(status_file), str(e)) from e


def read_segment_file(table_path: TablePath, segment_file_name: str) -> SegmentFile:
    path = table_path.segment_file(segment_file_name)
    data = _read_json(path)
    try:
        return SegmentFile.model_validate(data)
    except ValidationError as e:
        raise TableStatusError(str(path), str(e)) from e


class TableStatusReadCommittedScope(ReadCommittedScope):
    """Scope over the loads recorded in the table status file.

    The status file is read once, when the scope is created.
    """

    def __init__(self, identifier: AbsoluteTableIdentifier, config: StorageConfig):
        self.identifier = identifier
        self.config = config
        self.table_path = TablePath(identifier.table_path, config)
        self._loads = read_table_status(self.table_path)

    def get_segment_list(self) -> list[LoadMetadataDetails]:
        return list(self._loads)

    def _segment_file_name(self, segment: Segment) -> str | None:
        if segment.segment_file_name:
            return segment.segment_file_name
        for load in self._loads:
            if load.load_name == segment.segment_no:
                return load.segment_file
        return None

    def get_committed_index_files(self, segment: Segment) -> dict[str, str | None]:
        with LogContext(segment=segment.segment_no):
            segment_file_name = self._segment_file_name(segment)
            if segment_file_name:
                index_files = self._index_files_from_segment_file(segment_file_name)
            else:
                index_files = self._index_files_from_directory(segment.segment_no)
            logger.debug(
                f"Found {len(index_files)} committed index files "
                f"({segment_file_name or 'directory listing'})"
            )
        return index_files

    def _index_files_from_segment_file(self, segment_file_name: str) -> dict[str, str | None]:
        segment_file = read_segment_file(self.table_path, segment_file_name)
        index_files: dict[str, str | None] = {}
        for location, folder in segment_file.location_map.items():
            if folder.status != SegmentStatus.SUCCESS.value:
                continue
            base = self.table_path.resolve_location(location, folder.is_relative)
            merge_file = str(base / folder.merge_file_name) if folder.merge_file_name else None
            for name in folder.files:
                index_files[str(base / name)] = merge_file
        return index_files

    def _index_files_from_directory(self, segment_no: str) -> dict[str, str | None]:
        segment_dir = self.table_path.segment_dir(segment_no)
        if not segment_dir.is_dir():
            return {}
        try:
            entries = sorted(segment_dir.iterdir())
        except OSError as e:
            raise TableStatusError(str(segment_dir), e.strerror or str(e)) from e
        return {
            str(entry): None
            for entry in entries
            if entry.is_file() and is_index_file(entry.name, self.config)
        }


class SegmentStatusManager(SegmentResolver):
    """Resolves valid segments from the table status file."""

    def __init__(self, config: StorageConfig):
        self.config = config

    def valid_segments(self, identifier: AbsoluteTableIdentifier) -> list[Segment]:
        scope = TableStatusReadCommittedScope(identifier, self.config)
        segments = [
            Segment(load.load_name, load.segment_file, scope)
            for load in scope.get_segment_list()
            if load.load_status.is_valid
        ]
        logger.debug(
            f"Resolved {len(segments)} valid segments for {identifier.unique_name}"
        )
        return segments
