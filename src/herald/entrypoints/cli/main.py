"""HERALD CLI entry point.

Defines the top-level ``herald`` command (via Click-Extra) and registers the
subcommand groups:

- ``herald db``: forward-only database management (upgrade, status, ...).
- ``herald environments``: register and list environments.
- ``herald integrations``: create, list, update and delete integrations.
- ``herald providers``: browse the provider catalog.

Examples
    $ herald --version
    $ herald db upgrade
    $ herald environments create Production -o acme
    $ herald integrations create email sendgrid -o acme -e <env-id> \\
        -c apiKey=... -c secretKey=... --active
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from herald import __version__, config
from herald.logging import (
    LoggingOptions,
    configure_logging,
    level_from_counts,
    log_startup,
)

from .app import REDACTOR_MODE_KEY
from .db import db as db_group
from .environments import environments as environments_group
from .helpers import parse_log_level
from .integrations import integrations as integrations_group
from .providers import providers as providers_group


logger = logging.getLogger(__name__)


HELP = """HERALD command-line interface.

    HERALD configures the notification providers (e-mail, SMS, push, chat and
    in-app) an organization uses in each of its environments: it checks provider
    credentials, keeps identifiers unique, and enforces how many providers may be
    active per channel.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=Path(user_log_dir("herald", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="HERALD_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="HERALD_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records at "
        "DEBUG granularity (unaffected by -v/-q) and writes them to --log-path "
        "when a WARNING/ERROR occurs, or on exit if --force-flush is set."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Force-flush the flight recorder buffer to --log-path on program exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight-recorder. Repeatable (e.g. -L sqlalchemy=INFO "
        "-L alembic=WARNING) or via HERALD_LOGGER_LEVELS (comma/space list)."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    envvar="HERALD_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--redactor-mode",
    "redactor_mode",
    type=click.Choice(["lenient", "strict"], case_sensitive=False),
    help=(
        "How integration credentials are masked in output. 'lenient' (default) "
        "masks keys, tokens and passwords but keeps hosts/regions visible; "
        "'strict' masks every non-boolean value."
    ),
    default="lenient",
    envvar="HERALD_REDACTOR_MODE",
    show_envvar=True,
    show_default=True,
)
@clickx.pass_context
def herald(  # pylint: disable=too-many-arguments, too-many-locals, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
    redactor_mode: str,
) -> None:
    """HERALD command-line interface."""

    options = LoggingOptions(
        console_level=level_from_counts(verbose_count, quiet_count),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path if flight_recorder else None,
        flight_capacity=flight_recorder_capacity,
        flush_on_exit=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(options)
    ctx.meta[REDACTOR_MODE_KEY] = redactor_mode.lower()

    # settings errors are reported by the command that needs them
    try:
        settings = config.load_settings()
    except config.InvalidSettingError:
        settings = None
    log_startup(
        logger,
        app_version=__version__,
        options=options,
        handlers=handlers,
        settings=settings,
        redactor_mode=redactor_mode,
    )

    ctx.call_on_close(logging.shutdown)


herald.add_command(db_group)
herald.add_command(environments_group)
herald.add_command(integrations_group)
herald.add_command(providers_group)
