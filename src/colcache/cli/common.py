"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import orjson
import typer
from pydantic import ValidationError
from rich.console import Console

from colcache.config import settings
from colcache.core.model import DataMapSchema, TableMetadata
from colcache.observability.logging import configure_logging

err_console = Console(stderr=True)


def fail(message: str) -> typer.Exit:
    """Print an error line and return the exit to raise."""
    err_console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(code=1)


def setup(log_level: str | None) -> None:
    configure_logging(json_format=settings.log_json, level=log_level or settings.log_level)


def load_table(path: Path) -> TableMetadata:
    """Read table metadata from a JSON file."""
    try:
        return TableMetadata.model_validate(orjson.loads(path.read_bytes()))
    except OSError as e:
        raise fail(f"Cannot read {path}: {e.strerror or e}") from e
    except orjson.JSONDecodeError as e:
        raise fail(f"{path} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise fail(f"{path} is not valid table metadata:\n{e}") from e


def find_bloom_datamap(table: TableMetadata, name: str) -> DataMapSchema:
    datamap = table.get_datamap(name)
    if datamap is None:
        raise fail(f"Datamap {name} is not defined on table {table.qualified_name}")
    if not datamap.is_bloom:
        raise fail(f"Datamap {datamap.datamap_name} is a {datamap.provider_name} datamap")
    return datamap
