"""Global pytest configuration and fixtures.

Provides builders for on-disk table layouts used by storage and
derivation tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import pytest

from colcache.config import StorageConfig
from colcache.core.model import ColumnSchema, DataMapSchema, Encoding, TableMetadata
from colcache.storage.paths import TablePath


class TableLayout:
    """Writes table status, segment files, index files and datamap shards."""

    def __init__(self, root: Path, config: StorageConfig) -> None:
        self.root = root
        self.config = config
        self.paths = TablePath(root, config)
        self.loads: list[dict[str, Any]] = []
        root.mkdir(parents=True, exist_ok=True)

    def add_load(
        self,
        load_name: str,
        status: str = "Success",
        segment_file: str | None = None,
    ) -> None:
        entry: dict[str, Any] = {
            "loadName": load_name,
            "loadStatus": status,
            "timestamp": "1545215337469",
            "visibility": "true",
        }
        if segment_file is not None:
            entry["segmentFile"] = segment_file
        self.loads.append(entry)
        self.write_status()

    def write_status(self) -> None:
        self.paths.metadata_dir.mkdir(parents=True, exist_ok=True)
        self.paths.table_status_file.write_bytes(orjson.dumps(self.loads))

    def add_index_files(self, segment_no: str, *names: str) -> list[str]:
        segment_dir = self.paths.segment_dir(segment_no)
        segment_dir.mkdir(parents=True, exist_ok=True)
        for name in names:
            (segment_dir / name).write_bytes(b"")
        return [str(segment_dir / name) for name in names]

    def add_segment_file(self, name: str, location_map: dict[str, Any]) -> None:
        path = self.paths.segment_file(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps({"locationMap": location_map, "options": {}}))

    def add_shards(self, segment_no: str, datamap: str, *shards: str) -> list[str]:
        store = self.paths.datamap_store_dir(segment_no, datamap)
        store.mkdir(parents=True, exist_ok=True)
        for shard in shards:
            (store / shard).mkdir(exist_ok=True)
        return [str(store / shard) for shard in shards]


def make_table(
    table_path: str = "/warehouse/default/sales",
    *,
    transactional: bool = True,
    columns: list[ColumnSchema] | None = None,
    datamaps: list[DataMapSchema] | None = None,
) -> TableMetadata:
    return TableMetadata(
        database_name="default",
        table_name="sales",
        table_id="tbl-1",
        table_path=table_path,
        is_transactional_table=transactional,
        columns=tuple(columns or ()),
        datamaps=tuple(datamaps or ()),
    )


def dict_column(column_id: str, name: str | None = None) -> ColumnSchema:
    return ColumnSchema(
        column_id=column_id,
        column_name=name or column_id,
        encodings=(Encoding.DICTIONARY, Encoding.RLE),
    )


def plain_column(column_id: str, name: str | None = None, dimension: bool = True) -> ColumnSchema:
    return ColumnSchema(
        column_id=column_id,
        column_name=name or column_id,
        encodings=(Encoding.INVERTED_INDEX,),
        dimension=dimension,
    )


def bloom_datamap(name: str, columns: str) -> DataMapSchema:
    return DataMapSchema(
        datamap_name=name,
        provider_name="bloomfilter",
        properties={"INDEX_COLUMNS": columns},
    )


@pytest.fixture
def storage_config() -> StorageConfig:
    return StorageConfig()


@pytest.fixture
def layout(tmp_path: Path, storage_config: StorageConfig) -> TableLayout:
    return TableLayout(tmp_path / "sales", storage_config)
