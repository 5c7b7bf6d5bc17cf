#!/usr/bin/env python3
"""
CLI entry point for DIY Share database migrations.

Wraps Alembic so migrations run against the same database URL the API uses
(``DIYSHARE_DATABASE_URL`` or the configured default).
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from diyshare import __version__
from diyshare.logging import configure_logging, get_logger

logger = get_logger(__name__)

PROJECT_DIR = Path(__file__).resolve().parents[3]


def get_alembic_config() -> Config:
    """Load alembic.ini, from ``DIYSHARE_ALEMBIC_INI`` or the project root."""
    alembic_ini = Path(os.getenv("DIYSHARE_ALEMBIC_INI", PROJECT_DIR / "alembic.ini"))
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    # script_location lives next to the ini file
    config.set_main_option("script_location", str(alembic_ini.parent / "alembic"))
    return config


def run_alembic(action: str, fn: Callable[[Config], None], **log_fields) -> None:
    """Run an Alembic command, logging the outcome and exiting non-zero on failure."""
    try:
        config = get_alembic_config()
        logger.info(f"{action} started", **log_fields)
        fn(config)
        logger.info(f"{action} finished", **log_fields)
    except Exception as e:
        logger.error(f"{action} failed", error=str(e), **log_fields)
        click.echo(f"✗ {action} failed: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="diyshare-migrate")
def main(log_level: str) -> None:
    """DIY Share database migration management."""
    configure_logging(debug=(log_level == "debug"), level=log_level)


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    run_alembic(
        "Database upgrade", lambda cfg: command.upgrade(cfg, revision), revision=revision
    )


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    run_alembic(
        "Database downgrade", lambda cfg: command.downgrade(cfg, revision), revision=revision
    )


@main.command()
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Diff against the ORM models")
def revision(message: str, autogenerate: bool) -> None:
    """Create a new migration revision."""
    run_alembic(
        "Migration creation",
        lambda cfg: command.revision(cfg, message=message, autogenerate=autogenerate),
        message=message,
    )


@main.command()
def current() -> None:
    """Show current database revision."""
    run_alembic("Current revision lookup", command.current)


@main.command()
def history() -> None:
    """Show migration history."""
    run_alembic("History listing", command.history)


if __name__ == "__main__":
    main()
