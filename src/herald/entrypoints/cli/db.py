"""``herald db``: set up and inspect the integration database.

Only forward migrations are exposed (``upgrade``); there is no ``downgrade`` or
``stamp``. Alembic's own output goes to stdout, HERALD's notices to stderr.
Every command needs ``HERALD_DB_URL``; ``heads`` is the only one that works
without a reachable database.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import func, select, text
from sqlalchemy.exc import ArgumentError, OperationalError

from herald import config
from herald.adapters.db.engine import make_engine
from herald.adapters.db.schema import environments, integrations

from .app import MISSING_DB_URL_MSG
from .helpers import error, sanitize_url, success, warn

if TYPE_CHECKING:
    from alembic.config import Config
    from sqlalchemy.engine import Connection

INVALID_URL_FORMAT_MSG = (
    "The value of HERALD_DB_URL is not a valid SQLAlchemy database URL."
)

CANNOT_CONNECT_MSG = (
    "HERALD_DB_URL is set, but the database is not reachable.\n"
    "Please ensure the database is running and the URL is correct."
)

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the database schema to the latest version.\n"
    "Please ensure you have a backup before proceeding."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'herald db upgrade' to update the schema."


class MigrationStatus(Enum):
    """Where the database schema stands relative to the packaged migrations."""

    UP_TO_DATE = "up to date"
    OUT_OF_DATE = "out of date"
    UNINITIALIZED = "uninitialized"


@dataclass(frozen=True, slots=True)
class SchemaReport:
    """What ``herald db status`` knows about a reachable database."""

    revision: str | None
    status: MigrationStatus
    environment_count: int | None = None
    integration_count: int | None = None

    def describe(self) -> str:
        if self.revision is None:
            return self.status.value
        return f"{self.revision} ({self.status.value})"


def _connected_url() -> str:
    """Return HERALD_DB_URL once the database has answered a trivial query."""
    try:
        url = config.get_db_url()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e
    try:
        with make_engine(url).connect() as conn:
            conn.execute(text("SELECT 1"))  # pragma: no mutate
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    return url


def _inspect_schema(conn: Connection, cfg: Config) -> SchemaReport:
    revision = MigrationContext.configure(conn).get_current_revision()
    head = ScriptDirectory.from_config(cfg).get_current_head()
    if revision is None:
        return SchemaReport(revision, MigrationStatus.UNINITIALIZED)
    if revision != head:
        return SchemaReport(revision, MigrationStatus.OUT_OF_DATE)  # pragma: no cover
    return SchemaReport(
        revision,
        MigrationStatus.UP_TO_DATE,
        environment_count=conn.scalar(select(func.count()).select_from(environments)),
        integration_count=conn.scalar(select(func.count()).select_from(integrations)),
    )


verbose_option = click.option(
    "--verbose",
    "-v",
    "verbose",
    is_flag=True,
    help="Show alembic's more verbose output.",
)


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Database management commands."""


@db.command()
@verbose_option
def current(verbose: bool) -> None:
    """Show the database's current revision."""
    cfg = config.build_alembic_config(db_url=_connected_url(), stdout=sys.stdout)
    command.current(cfg, verbose=verbose)


@db.command()
@verbose_option
def heads(verbose: bool) -> None:
    """Show the newest packaged revision (no database needed)."""
    command.heads(config.build_alembic_config(stdout=sys.stdout), verbose=verbose)


@db.command()
@verbose_option
@click.option(
    "--indicate-current",
    "-i",
    "indicate_current",
    is_flag=True,
    help="Mark the database's current revision.",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """List the packaged migrations."""
    url = _connected_url() if indicate_current else None
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    command.history(cfg, verbose=verbose, indicate_current=indicate_current)


@db.command()
@click.option("--sql", is_flag=True, help="Print the SQL instead of running it.")
@click.option("--force", is_flag=True, help="Upgrade without confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Create or upgrade the environment and integration tables."""
    url = _connected_url()
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    if not (force or sql):
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"db: {click.style(sanitize_url(url), underline=True)}")
        click.confirm("Are you sure you want to proceed?", abort=True)
    command.upgrade(cfg, revision="head", sql=sql)
    success("Upgrade complete!")


@db.command()
def status() -> None:
    """Show whether the database is reachable, migrated and populated."""
    try:
        url = _connected_url()
    except click.ClickException as e:
        error("Cannot connect to database")
        click.echo(e.format_message())
        raise click.exceptions.Exit(1) from e

    engine = make_engine(url)
    with engine.connect() as conn:
        report = _inspect_schema(conn, config.build_alembic_config(db_url=url))
    engine.dispose()

    success("Database reachable")
    click.echo(f"Backend : {engine.dialect.name}")
    click.echo(f"URL     : {sanitize_url(url)}")
    click.echo(f"Schema  : {report.describe()}")
    if report.status is MigrationStatus.UP_TO_DATE:
        click.echo(
            f"Contents: {report.environment_count} environment(s), "
            f"{report.integration_count} integration(s)"
        )
    else:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
