#!/usr/bin/env python3
"""
``diyshare`` command: run the API, seed demo data, search DIYs from a terminal.
"""

import asyncio
import os
import sys

import click
import uvicorn

from diyshare import __version__
from diyshare.logging import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_GRAPHQL_URL = "http://localhost:3001/graphql"
APP_IMPORT_PATH = "diyshare.api.app:app"
LOG_LEVELS = click.Choice(["debug", "info", "warning", "error"])


@click.group()
@click.version_option(version=__version__, prog_name="diyshare")
def cli() -> None:
    """DIY Share: share, comment on, like and save DIY projects."""


@cli.command()
@click.option("--host", help="Bind address (default: DIYSHARE_API_HOST)")
@click.option("--port", type=int, help="Bind port (default: DIYSHARE_API_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
@click.option("--workers", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--log-level", default="info", show_default=True, type=LOG_LEVELS)
def serve(host: str | None, port: int | None, reload: bool, workers: int, log_level: str) -> None:
    """Run the GraphQL API with uvicorn."""
    from diyshare.config import settings

    debug = log_level == "debug"
    configure_logging(debug=debug, level=log_level)

    # Worker and reloader processes import the app themselves and configure from the environment
    os.environ["DIYSHARE_LOG_LEVEL"] = log_level
    if debug:
        os.environ["DIYSHARE_DEBUG"] = "true"

    bind = {"host": host or settings.api_host, "port": port or settings.api_port}
    logger.info("DIY Share API listening", reload=reload, workers=workers, **bind)

    try:
        uvicorn.run(
            APP_IMPORT_PATH,
            reload=reload or settings.api_reload,
            workers=1 if reload else workers,
            log_level=log_level,
            **bind,
        )
    except KeyboardInterrupt:
        logger.info("DIY Share API interrupted")
    except Exception as e:
        logger.error("DIY Share API failed to start", error=str(e))
        sys.exit(1)


async def _seed() -> int:
    from diyshare.database.connection import dispose_database, get_async_session
    from diyshare.database.seed_data import seed_initial_data

    try:
        async with get_async_session() as db:
            return await seed_initial_data(db)
    finally:
        await dispose_database()


@cli.command()
def seed() -> None:
    """Insert demo users and their DIYs. Running it twice adds nothing new."""
    configure_logging()

    try:
        created = asyncio.run(_seed())
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        click.echo(f"✗ Seeding failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Seeded {created} DIY(s)" if created else "✓ Demo data already present")


@cli.command()
@click.argument("term", required=False)
@click.option(
    "--url",
    default=DEFAULT_GRAPHQL_URL,
    envvar="DIYSHARE_GRAPHQL_URL",
    help=f"GraphQL endpoint (default: {DEFAULT_GRAPHQL_URL})",
)
def search(term: str | None, url: str) -> None:
    """Search DIYs by title or description.

    Without TERM, reads search terms line by line until a blank line.
    """
    from diyshare.client import GraphQLClient, GraphQLClientError, SearchBar

    configure_logging()
    search_bar = SearchBar(GraphQLClient(url))

    def run_once(value: str) -> bool:
        try:
            asyncio.run(search_bar.handle_change(value))
        except GraphQLClientError as e:
            click.echo(f"✗ Search failed: {e}", err=True)
            return False
        for entry in search_bar.render():
            click.echo(entry)
        return True

    if term is not None:
        if not run_once(term):
            sys.exit(1)
        return

    while True:
        value = click.prompt("Search for DIYs", default="", show_default=False)
        if not value.strip():
            break
        run_once(value)
        click.echo()


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
