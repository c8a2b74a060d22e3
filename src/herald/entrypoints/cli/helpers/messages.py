"""Terminal message helpers for the HERALD CLI.

User-visible status lines with emoji→ASCII fallbacks. Everything goes to
stderr so stdout stays machine-readable (e.g. with ``--json``).
"""

import click

from herald.service_layer.responses import ErrorResponse

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS = ("✅", "[OK]")  # pragma: no mutate
FAILURE = ("❌", "[X]")  # pragma: no mutate


def glyph(choices: tuple[str, str]) -> str:
    """Return the emoji of `choices` if stderr can encode it, else the fallback."""
    emoji, fallback = choices
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        emoji.encode(encoding)
    except UnicodeEncodeError:
        return fallback
    return emoji


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to stderr."""
    click.secho(f"{glyph(CAUTION)}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to stderr."""
    click.secho(f"{glyph(SUCCESS)}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to stderr."""
    click.secho(f"{glyph(FAILURE)}  {msg}", fg="red", bold=True, err=True)


def report(response: ErrorResponse) -> None:
    """Emit an error line for a failed command, tagged with its code and status.

    Example:
        ``❌  Integration with identifier already exists [identifier_conflict, 409]``
    """
    error(f"{response.message} [{response.error}, {response.status_code}]")
