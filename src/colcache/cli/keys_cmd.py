"""CLI commands for listing a table's cache keys.

Usage:
    colcache keys index-files table.json
    colcache keys dictionary table.json --format json
    colcache keys bloom table.json --datamap dm_city
    colcache keys all table.json
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import orjson
import typer

from colcache.cache.deriver import CacheKeyDeriver
from colcache.cli.common import fail, find_bloom_datamap, load_table, setup
from colcache.config import settings
from colcache.core.model import TableMetadata
from colcache.errors import ColcacheError

app = typer.Typer(help="List the cache keys of a table's artifacts", no_args_is_help=True)

TABLE_ARGUMENT = typer.Argument(..., help="JSON file describing the table", exists=True)
FORMAT_OPTION = typer.Option("text", "--format", "-f", help="Output format: text, json")
LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="Override the configured log level")


def _emit(
    table_file: Path,
    output_format: str,
    log_level: str | None,
    derive: Callable[[CacheKeyDeriver, TableMetadata], list[str]],
) -> None:
    if output_format not in ("text", "json"):
        raise fail(f"Unsupported format {output_format!r}. Use text or json.")
    setup(log_level)

    table = load_table(table_file)
    deriver = CacheKeyDeriver(storage_config=settings.storage)
    try:
        keys = derive(deriver, table)
    except ColcacheError as e:
        raise fail(str(e)) from e

    if output_format == "json":
        typer.echo(orjson.dumps(keys, option=orjson.OPT_INDENT_2).decode())
    else:
        for key in keys:
            typer.echo(key)


@app.command("index-files")
def index_files(
    table_file: Path = TABLE_ARGUMENT,
    output_format: str = FORMAT_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """List the committed index files of every segment."""
    _emit(table_file, output_format, log_level, lambda d, t: d.index_file_keys(t))


@app.command("dictionary")
def dictionary(
    table_file: Path = TABLE_ARGUMENT,
    output_format: str = FORMAT_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """List forward and reverse dictionary keys."""
    _emit(table_file, output_format, log_level, lambda d, t: d.dictionary_keys(t))


@app.command("bloom")
def bloom(
    table_file: Path = TABLE_ARGUMENT,
    datamap: str = typer.Option(..., "--datamap", "-d", help="Bloom datamap name"),
    output_format: str = FORMAT_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """List bloom filter keys of one datamap."""
    _emit(
        table_file,
        output_format,
        log_level,
        lambda d, t: d.bloom_cache_keys(t, find_bloom_datamap(t, datamap)),
    )


@app.command("all")
def all_keys(
    table_file: Path = TABLE_ARGUMENT,
    output_format: str = FORMAT_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """List index file, dictionary and bloom keys together."""
    _emit(table_file, output_format, log_level, lambda d, t: d.all_keys(t))
