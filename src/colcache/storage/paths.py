"""Path helpers for the table layout.

Layout:
    {table}/Metadata/tablestatus
    {table}/Metadata/segments/{segment_file}
    {table}/Fact/Part0/Segment_{no}/...index files...
    {table}/Fact/Part0/Segment_{no}/{datamap}/{shard}/
"""

from __future__ import annotations

from pathlib import Path

from colcache.config import StorageConfig


class TablePath:
    """Resolves file locations inside a table directory."""

    def __init__(self, table_path: str | Path, config: StorageConfig):
        self.root = Path(table_path)
        self.config = config

    @property
    def metadata_dir(self) -> Path:
        return self.root / self.config.metadata_dir

    @property
    def table_status_file(self) -> Path:
        return self.metadata_dir / self.config.table_status_file

    def segment_file(self, segment_file_name: str) -> Path:
        return self.metadata_dir / self.config.segments_dir / segment_file_name

    def segment_dir(self, segment_no: str) -> Path:
        return (
            self.root
            / self.config.fact_dir
            / self.config.partition_dir
            / f"{self.config.segment_prefix}{segment_no}"
        )

    def datamap_store_dir(self, segment_no: str, datamap_name: str) -> Path:
        return self.segment_dir(segment_no) / datamap_name

    def resolve_location(self, location: str, is_relative: bool) -> Path:
        """Resolve a segment file folder against the table root."""
        if is_relative:
            return self.root / location.lstrip("/")
        return Path(location)


def is_index_file(name: str, config: StorageConfig) -> bool:
    return name.endswith(config.index_extensions)


def segment_id_from_file_name(name: str, config: StorageConfig) -> str:
    """Return the timestamp suffix that identifies a non-transactional load.

    ``part-0-0_batchno0-0-0-1545215337469.carbonindex`` -> ``1545215337469``
    """
    stem = name
    for ext in sorted(config.index_extensions, key=len, reverse=True):
        if stem.endswith(ext):
            stem = stem[: -len(ext)]
            break
    return stem.rsplit("-", 1)[-1]
