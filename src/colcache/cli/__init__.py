"""CLI commands for colcache.

Provides command-line interface using Typer:
- colcache keys: List the cache keys of a table's artifacts
- colcache drop-cache: Delete a table's cached artifacts from Redis

Usage:
    colcache --help
    colcache keys all table.json
    colcache drop-cache table.json --datamap dm_city
"""

import typer

from colcache.cli.drop_cmd import drop_cache
from colcache.cli.keys_cmd import app as keys_app

# Main CLI application
app = typer.Typer(
    name="colcache",
    help="colcache: cache keys for columnar table artifacts",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(keys_app, name="keys")
app.command("drop-cache")(drop_cache)


@app.callback()
def callback() -> None:
    """colcache: cache keys for columnar table artifacts."""
    pass


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
