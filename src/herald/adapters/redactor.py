"""Key-based redactor for masking secrets in integration credentials.

Values whose key looks like a secret (api keys, tokens, passwords, service
accounts, ...) are replaced by a placeholder. Strict mode additionally masks
account identifiers and usernames, and in fact every non-boolean value.
Nested mappings (e.g. SMTP ``tlsOptions``) are redacted recursively.
"""

import re
from collections.abc import Mapping
from typing import Any

from herald.interfaces import redactor
from herald.interfaces.redactor import RedactorMode

# pylint: disable=too-few-public-methods

PLACEHOLDER = "***"
SECRET_KEYWORDS = [
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "api_key",
    "apikey",
    "access_key",
    "private_key",
    "service_account",
    "authorization",
    "signature",
]
SECRET_KEY_PATTERN = re.compile(
    "|".join(kw.replace("_", "[-_]?") for kw in SECRET_KEYWORDS), re.IGNORECASE
)


class Redactor(redactor.Redactor):
    """Redactor implementation keyed on credential field names."""

    def __init__(self, mode: RedactorMode = RedactorMode.LENIENT) -> None:
        self._mode = mode

    def redact_credentials(self, credentials: Mapping[str, Any]) -> dict[str, Any]:
        return {key: self._redact(key, value) for key, value in credentials.items()}

    def _redact(self, key: str, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self.redact_credentials(value)
        if value is None or isinstance(value, bool):
            return value
        if self._mode == RedactorMode.STRICT or SECRET_KEY_PATTERN.search(key):
            return PLACEHOLDER
        return value
