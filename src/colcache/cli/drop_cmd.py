"""CLI command for dropping a table's cached artifacts from Redis.

Usage:
    colcache drop-cache table.json
    colcache drop-cache table.json --datamap dm_city
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from colcache.cache.deriver import CacheKeyDeriver
from colcache.cache.invalidation import TableCacheInvalidator, close_redis, get_redis
from colcache.cli.common import fail, find_bloom_datamap, load_table, setup
from colcache.config import settings
from colcache.core.model import DataMapSchema, TableMetadata
from colcache.errors import ColcacheError


async def _drop(table: TableMetadata, datamap: DataMapSchema | None) -> int:
    client = await get_redis()
    try:
        invalidator = TableCacheInvalidator(
            client, CacheKeyDeriver(storage_config=settings.storage)
        )
        if datamap is not None:
            return await invalidator.drop_datamap_cache(table, datamap)
        return await invalidator.drop_table_cache(table)
    finally:
        await close_redis()


def drop_cache(
    table_file: Path = typer.Argument(..., help="JSON file describing the table", exists=True),
    datamap_name: str | None = typer.Option(
        None,
        "--datamap",
        "-d",
        help="Only drop the bloom filters of this datamap",
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override the configured log level"
    ),
) -> None:
    """Delete every cached index file, dictionary and bloom entry of a table."""
    setup(log_level)
    console = Console()

    table = load_table(table_file)
    datamap = find_bloom_datamap(table, datamap_name) if datamap_name else None
    try:
        removed = asyncio.run(_drop(table, datamap))
    except ColcacheError as e:
        raise fail(str(e)) from e

    console.print(f"[green]Dropped {removed} cache entries[/green] for {table.qualified_name}")
