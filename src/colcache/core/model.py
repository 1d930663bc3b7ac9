"""Table metadata models.

These mirror the schema and status files written by the columnar storage
engine. They are read-only inputs to key derivation: instances are built per
call (from JSON or by the storage layer) and never mutated.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from colcache.errors import MalformedDataMapError

INDEX_COLUMNS_PROPERTY = "INDEX_COLUMNS"
BLOOM_PROVIDER = "bloomfilter"


class MetadataModel(BaseModel):
    """Base model for metadata read from disk or JSON.

    Unknown keys are ignored so that newer writers stay readable.
    """

    model_config = {
        "extra": "ignore",
        "populate_by_name": True,
        "frozen": True,
    }


class Encoding(str, Enum):
    """Column encodings recorded in the table schema."""

    DICTIONARY = "DICTIONARY"
    DIRECT_DICTIONARY = "DIRECT_DICTIONARY"
    DELTA = "DELTA"
    RLE = "RLE"
    INVERTED_INDEX = "INVERTED_INDEX"
    BIT_PACKED = "BIT_PACKED"
    DIRECT_COMPRESS = "DIRECT_COMPRESS"
    DIRECT_STRING = "DIRECT_STRING"
    ADAPTIVE_INTEGRAL = "ADAPTIVE_INTEGRAL"
    ADAPTIVE_DELTA_INTEGRAL = "ADAPTIVE_DELTA_INTEGRAL"
    ADAPTIVE_FLOATING = "ADAPTIVE_FLOATING"
    ADAPTIVE_DELTA_FLOATING = "ADAPTIVE_DELTA_FLOATING"
    BOOL_BYTE = "BOOL_BYTE"


class ColumnSchema(MetadataModel):
    """A column definition."""

    column_id: str = Field(..., alias="columnId", min_length=1)
    column_name: str = Field(..., alias="columnName", min_length=1)
    data_type: str = Field(default="STRING", alias="dataType")
    encodings: tuple[Encoding, ...] = ()
    dimension: bool = Field(default=True, alias="isDimension")

    @property
    def is_global_dictionary_encoding(self) -> bool:
        """Whether values go through the table-wide dictionary.

        Direct-dictionary columns (dates, timestamps) compute their surrogate
        keys and never load a dictionary.
        """
        return (
            Encoding.DICTIONARY in self.encodings
            and Encoding.DIRECT_DICTIONARY not in self.encodings
        )


class AbsoluteTableIdentifier(MetadataModel):
    """Locates a table on storage."""

    table_path: str = Field(..., alias="tablePath", min_length=1)
    database_name: str = Field(default="default", alias="databaseName")
    table_name: str = Field(..., alias="tableName")
    table_id: str = Field(default="", alias="tableId")

    @property
    def unique_name(self) -> str:
        return f"{self.database_name}_{self.table_name}"


class DataMapSchema(MetadataModel):
    """A secondary index (datamap) defined on a table."""

    datamap_name: str = Field(..., alias="dataMapName", min_length=1)
    provider_name: str = Field(default=BLOOM_PROVIDER, alias="providerName")
    properties: dict[str, str] = Field(default_factory=dict)

    @property
    def is_bloom(self) -> bool:
        return self.provider_name.lower() == BLOOM_PROVIDER

    @property
    def index_columns(self) -> list[str]:
        """Column names from the INDEX_COLUMNS property, in declared order."""
        for key, value in self.properties.items():
            if key.upper() == INDEX_COLUMNS_PROPERTY:
                return [name.strip() for name in value.split(",") if name.strip()]
        return []


class TableMetadata(MetadataModel):
    """Schema and location of one table."""

    database_name: str = Field(default="default", alias="databaseName")
    table_name: str = Field(..., alias="tableName", min_length=1)
    table_id: str = Field(default="", alias="tableId")
    table_path: str = Field(..., alias="tablePath", min_length=1)
    is_transactional_table: bool = Field(default=True, alias="isTransactionalTable")
    columns: tuple[ColumnSchema, ...] = ()
    datamaps: tuple[DataMapSchema, ...] = Field(default=(), alias="dataMaps")

    @property
    def identifier(self) -> AbsoluteTableIdentifier:
        return AbsoluteTableIdentifier(
            table_path=self.table_path,
            database_name=self.database_name,
            table_name=self.table_name,
            table_id=self.table_id,
        )

    @property
    def qualified_name(self) -> str:
        return f"{self.database_name}.{self.table_name}"

    @property
    def dimensions(self) -> list[ColumnSchema]:
        return [column for column in self.columns if column.dimension]

    @property
    def bloom_datamaps(self) -> list[DataMapSchema]:
        return [datamap for datamap in self.datamaps if datamap.is_bloom]

    def get_column_by_name(self, name: str) -> ColumnSchema | None:
        """Case-insensitive column lookup."""
        wanted = name.lower()
        for column in self.columns:
            if column.column_name.lower() == wanted:
                return column
        return None

    def get_datamap(self, name: str) -> DataMapSchema | None:
        wanted = name.lower()
        for datamap in self.datamaps:
            if datamap.datamap_name.lower() == wanted:
                return datamap
        return None

    def indexed_columns(self, datamap: DataMapSchema) -> list[ColumnSchema]:
        """Resolve the datamap's index columns against this table.

        A datamap without index columns resolves to an empty list.

        Raises:
            MalformedDataMapError: If the datamap names a column the table
                does not have.
        """
        columns = []
        for name in datamap.index_columns:
            column = self.get_column_by_name(name)
            if column is None:
                raise MalformedDataMapError(
                    f"Column {name} of datamap {datamap.datamap_name} "
                    f"does not exist in table {self.qualified_name}"
                )
            columns.append(column)
        return columns


class SegmentStatus(str, Enum):
    """Load status as spelled in the table status file."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    LOAD_PARTIAL_SUCCESS = "Partial Success"
    MARKED_FOR_DELETE = "Marked for Delete"
    MARKED_FOR_UPDATE = "Marked for Update"
    COMPACTED = "Compacted"
    INSERT_IN_PROGRESS = "Insert In Progress"
    INSERT_OVERWRITE_IN_PROGRESS = "Insert Overwrite In Progress"
    STREAMING = "Streaming"
    STREAMING_FINISH = "Streaming Finish"

    @property
    def is_valid(self) -> bool:
        """Whether a load with this status is visible to queries."""
        return self in _VALID_STATUSES


_VALID_STATUSES = frozenset(
    {
        SegmentStatus.SUCCESS,
        SegmentStatus.MARKED_FOR_UPDATE,
        SegmentStatus.LOAD_PARTIAL_SUCCESS,
    }
)


class LoadMetadataDetails(MetadataModel):
    """One entry of the table status file."""

    load_name: str = Field(..., alias="loadName")
    load_status: SegmentStatus = Field(default=SegmentStatus.SUCCESS, alias="loadStatus")
    segment_file: str | None = Field(default=None, alias="segmentFile")


class FolderDetails(MetadataModel):
    """Index files committed under one folder of a segment."""

    files: tuple[str, ...] = ()
    merge_file_name: str | None = Field(default=None, alias="mergeFileName")
    status: str = SegmentStatus.SUCCESS.value
    is_relative: bool = Field(default=True, alias="isRelative")


class SegmentFile(MetadataModel):
    """Contents of a segment file under ``Metadata/segments``."""

    location_map: dict[str, FolderDetails] = Field(default_factory=dict, alias="locationMap")
    options: dict[str, str] = Field(default_factory=dict)
