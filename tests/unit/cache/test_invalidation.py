"""Tests for dropping cached table artifacts."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from conftest import bloom_datamap, dict_column, make_table

from colcache.cache.deriver import CacheKeyDeriver
from colcache.cache.invalidation import TableCacheInvalidator


class FakePipeline:
    def __init__(self, store: set[str]) -> None:
        self.store = store
        self.batches: list[tuple[str, ...]] = []

    async def __aenter__(self) -> FakePipeline:
        return self

    async def __aexit__(self, *args: Any) -> None:
        return None

    def delete(self, *keys: str) -> None:
        self.batches.append(keys)

    async def execute(self) -> list[int]:
        results = []
        for batch in self.batches:
            present = [key for key in batch if key in self.store]
            self.store.difference_update(present)
            results.append(len(present))
        return results


class FakeRedis:
    def __init__(self, keys: set[str]) -> None:
        self.store = set(keys)
        self.pipelines: list[FakePipeline] = []

    def pipeline(self) -> FakePipeline:
        pipe = FakePipeline(self.store)
        self.pipelines.append(pipe)
        return pipe


def deriver_returning(all_keys: list[str], bloom_keys: list[str] | None = None) -> MagicMock:
    deriver = MagicMock(spec=CacheKeyDeriver)
    deriver.all_keys.return_value = all_keys
    deriver.bloom_cache_keys.return_value = bloom_keys or []
    return deriver


class TestTableCacheInvalidator:
    """Test TableCacheInvalidator."""

    @pytest.mark.asyncio
    async def test_drop_table_cache(self) -> None:
        """Derived keys are namespaced and deleted."""
        client = FakeRedis({"colcache:a_FORWARD", "colcache:a_REVERSE", "colcache:other"})
        deriver = deriver_returning(["a_FORWARD", "a_REVERSE", "0.carbonindex"])
        invalidator = TableCacheInvalidator(client, deriver, prefix="colcache")
        table = make_table(columns=[dict_column("a")])

        removed = await invalidator.drop_table_cache(table)

        assert removed == 2
        assert client.store == {"colcache:other"}
        deriver.all_keys.assert_called_once_with(table)

    @pytest.mark.asyncio
    async def test_batches(self) -> None:
        client = FakeRedis(set())
        deriver = deriver_returning([f"k{i}" for i in range(5)])
        invalidator = TableCacheInvalidator(client, deriver, prefix="", batch_size=2)

        await invalidator.drop_table_cache(make_table())

        assert client.pipelines[0].batches == [("k0", "k1"), ("k2", "k3"), ("k4",)]

    @pytest.mark.asyncio
    async def test_no_keys_skips_redis(self) -> None:
        client = FakeRedis(set())
        invalidator = TableCacheInvalidator(client, deriver_returning([]))

        assert await invalidator.drop_table_cache(make_table()) == 0
        assert client.pipelines == []

    @pytest.mark.asyncio
    async def test_drop_datamap_cache(self) -> None:
        bloom_key = "CacheKey{shardPath='/s', indexColumn='a'}"
        client = FakeRedis({f"ns:{bloom_key}", "ns:a_FORWARD"})
        deriver = deriver_returning(["unused"], bloom_keys=[bloom_key])
        invalidator = TableCacheInvalidator(client, deriver, prefix="ns")
        datamap = bloom_datamap("dm", "a")
        table = make_table(columns=[dict_column("a")], datamaps=[datamap])

        assert await invalidator.drop_datamap_cache(table, datamap) == 1
        assert client.store == {"ns:a_FORWARD"}
        deriver.bloom_cache_keys.assert_called_once_with(table, datamap)
        deriver.all_keys.assert_not_called()

    @pytest.mark.asyncio
    async def test_derivation_error_propagates(self) -> None:
        client = FakeRedis({"colcache:x"})
        deriver = MagicMock(spec=CacheKeyDeriver)
        deriver.all_keys.side_effect = FileNotFoundError("gone")
        invalidator = TableCacheInvalidator(client, deriver)

        with pytest.raises(FileNotFoundError):
            await invalidator.drop_table_cache(make_table())
        assert client.pipelines == []

    def test_default_prefix_from_settings(self) -> None:
        invalidator = TableCacheInvalidator(FakeRedis(set()), deriver_returning([]))
        assert invalidator.namespaced("k") == "colcache:k"
