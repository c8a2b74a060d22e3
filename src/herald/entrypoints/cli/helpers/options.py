"""Click callbacks for repeatable ``NAME=VALUE`` options.

Two options share the same syntax (repeatable, or a comma/space separated
list from an environment variable):

- ``--logger-level NAME=LEVEL`` → ``{logger name: numeric level}``
- ``--credential KEY=VALUE`` → ``{credential key: value}``; ``true``/``false``
  become booleans, everything else stays a string (use ``--credentials-json``
  for numbers or nested values).
"""

import json
import logging
import re
from typing import Any

import click

DEFAULT_LIB_LEVELS = {"sqlalchemy": logging.WARNING, "alembic": logging.WARNING}

_BOOLEANS = {"true": True, "false": False}


def _split_pairs(value: str | list[str] | tuple[str, ...]) -> list[tuple[str, str]]:
    """Flatten the raw option value(s) into ``(name, value)`` pairs.

    Raises:
        click.BadParameter: If an item is not of the form NAME=VALUE.
    """
    raw = [value] if isinstance(value, str) else list(value or ())
    pairs: list[tuple[str, str]] = []
    for chunk in raw:
        for item in (s for s in re.split(r"[,\s]+", chunk) if s):
            name, sep, rest = item.partition("=")
            if not sep or not name.strip():
                raise click.BadParameter(f"Expected NAME=VALUE, got {item!r}")
            pairs.append((name.strip(), rest))
    return pairs


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    Overrides are layered on top of DEFAULT_LIB_LEVELS.

    Raises:
        click.BadParameter: If an item is malformed or LEVEL is not a logging level.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for name, level_str in _split_pairs(value):
        lvl = logging.getLevelNamesMapping().get(level_str.strip().upper())
        if lvl is None:
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name] = lvl
    return levels


def parse_credentials(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: tuple[str, ...],
) -> dict[str, Any]:
    """Click callback that parses KEY=VALUE pairs into a credentials mapping.

    Credential values may contain commas or spaces only when given one per
    ``--credential`` flag, so values are not split further here.
    """
    credentials: dict[str, Any] = {}
    for item in value or ():
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}")
        credentials[key.strip()] = _BOOLEANS.get(raw.strip().lower(), raw)
    return credentials


def parse_credentials_json(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | None,
) -> dict[str, Any] | None:
    """Click callback that parses a JSON object of credentials.

    Raises:
        click.BadParameter: If the value is not valid JSON or not an object.
    """
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e.msg}") from e
    if not isinstance(parsed, dict):
        raise click.BadParameter("Expected a JSON object")
    return parsed
