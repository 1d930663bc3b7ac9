"""Table metadata and segment handles."""

from colcache.core.model import (
    AbsoluteTableIdentifier,
    ColumnSchema,
    DataMapSchema,
    Encoding,
    FolderDetails,
    LoadMetadataDetails,
    SegmentFile,
    SegmentStatus,
    TableMetadata,
)
from colcache.core.segment import Segment

__all__ = [
    "AbsoluteTableIdentifier",
    "ColumnSchema",
    "DataMapSchema",
    "Encoding",
    "FolderDetails",
    "LoadMetadataDetails",
    "Segment",
    "SegmentFile",
    "SegmentStatus",
    "TableMetadata",
]
