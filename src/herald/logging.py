"""Logging setup for the HERALD CLI.

Two sinks are wired onto the root logger:

* a Rich console handler on stderr whose threshold follows ``-v``/``-q``;
* an optional "flight recorder": a memory buffer of DEBUG records that is
  written to ``--log-path`` as soon as something goes wrong (WARNING+), so a
  failed ``herald integrations create`` leaves a full trace behind without
  cluttering the console.

Integration credentials never reach these sinks: handlers log provider ids,
identifiers and environment ids only.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from herald.config import Settings

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "herald"
DEFAULT_CONSOLE_LEVEL = logging.WARNING
DEFAULT_FLIGHT_CAPACITY = 2000

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

CONSOLE_FORMAT = "%(origin)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


def level_from_counts(verbose: int, quiet: int) -> int:
    """Shift the WARNING default by ten per ``-v`` (down) or ``-q`` (up).

    The result is clamped to the DEBUG..CRITICAL range.
    """
    level = DEFAULT_CONSOLE_LEVEL - 10 * verbose + 10 * quiet
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True, slots=True)
class LoggingOptions:
    """Logging choices made on the ``herald`` command line."""

    console_level: int = DEFAULT_CONSOLE_LEVEL
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_capacity: int = DEFAULT_FLIGHT_CAPACITY
    flush_on_exit: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def effective_console_level(self) -> int:
        return logging.DEBUG if self.debug else self.console_level

    @property
    def recorder_enabled(self) -> bool:
        return self.log_path is not None


class OriginFilter(logging.Filter):
    """Tag each record with where it came from.

    HERALD's own records get an empty ``origin``; records from libraries such
    as SQLAlchemy or Alembic get their top-level package in brackets, e.g.
    ``[sqlalchemy]``, so they stand out on the console.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.split(".", 1)[0]
        record.origin = "" if top == PROJECT_PREFIX else f"[{top}]"
        return True


def build_console_handler(options: LoggingOptions) -> RichHandler:
    """Return the stderr handler; debug mode adds timestamps and source paths."""
    color_system: ColorSystem | None = "auto" if options.color else None
    handler = RichHandler(
        level=options.effective_console_level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=options.debug,
        enable_link_path=options.debug,
    )
    if options.debug:
        handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.addFilter(OriginFilter())
    return handler


def build_flight_recorder(
    path: Path,
    capacity: int = DEFAULT_FLIGHT_CAPACITY,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Buffer up to ``capacity`` records; write them to ``path`` on WARNING+.

    Args:
        path: File the buffer is written to (truncated when opened).
        capacity: Number of records kept before a forced flush.
        flush_on_close: Also write whatever is buffered when logging shuts down.

    Returns:
        MemoryHandler: The buffer, targeting a DEBUG-level file handler.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=flush_on_close,
    )


def configure_logging(options: LoggingOptions) -> list[logging.Handler]:
    """Install HERALD's handlers on the root logger and apply level overrides.

    The root logger itself stays at DEBUG so the flight recorder sees
    everything; the console handler does its own threshold filtering.
    Calling this again replaces the handlers of a previous call.

    Returns:
        list[logging.Handler]: The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [build_console_handler(options)]
    if options.log_path is not None:
        handlers.append(
            build_flight_recorder(
                options.log_path,
                capacity=options.flight_capacity,
                flush_on_close=options.flush_on_exit,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in options.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(
    logger: logging.Logger,
    *,
    app_version: str,
    options: LoggingOptions,
    handlers: list[logging.Handler],
    settings: Settings | None = None,
    redactor_mode: str | None = None,
) -> None:
    """Log a one-line summary at INFO and environment diagnostics at DEBUG.

    ``settings`` is None when the HERALD_* environment could not be parsed;
    the failing command reports that error itself.
    """
    logger.info(
        "HERALD %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(options.effective_console_level),
        "ON" if options.recorder_enabled else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s, CWD: %s", os.getpid(), Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if options.recorder_enabled:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_exit=%s",
            options.log_path,
            options.flight_capacity,
            options.flush_on_exit,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in options.logger_levels.items()}
        or "<none>",
    )
    if settings is None:
        logger.debug("Settings: <invalid, see command output>")
    else:
        logger.debug(
            "Settings: multi_provider=%s, active_provider_policy=%s, db_timeout=%ss",
            settings.multi_provider_enabled,
            settings.active_provider_policy.value,
            settings.db_timeout_s,
        )
    if redactor_mode is not None:
        logger.debug("Redactor mode: %s", redactor_mode)
