"""CLI helpers for HERALD.

Utilities used by the command-line interface: URL sanitization for safe display,
``NAME=VALUE`` option parsing, message emitters that write to stderr with
emoji→ASCII fallbacks, and rendering of integrations/environments.
"""

from .db_url import sanitize_url
from .messages import error, report, success, warn
from .options import parse_credentials, parse_credentials_json, parse_log_level

__all__ = [
    "error",
    "parse_credentials",
    "parse_credentials_json",
    "parse_log_level",
    "report",
    "sanitize_url",
    "success",
    "warn",
]
