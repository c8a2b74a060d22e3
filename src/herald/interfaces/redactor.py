"""Interfaces for redacting sensitive credential values.

This module defines the Redactor interface and the RedactorMode enumeration
used by adapters to mask secrets (API keys, tokens, passwords, ...) before
integration credentials are displayed or logged.
"""

import abc
from collections.abc import Mapping
from enum import Enum
from typing import Any

# pylint: disable=too-few-public-methods


class RedactorMode(Enum):
    """Enumeration for redactor modes.

    Modes:
    - LENIENT: mask secrets (keys, tokens, passwords) but keep hosts/ids visible.
    - STRICT: mask every non-boolean value.
    """

    LENIENT = "lenient"
    STRICT = "strict"


class Redactor(abc.ABC):
    """Interface for masking sensitive values in credential payloads."""

    _mode: RedactorMode

    @abc.abstractmethod
    def redact_credentials(self, credentials: Mapping[str, Any]) -> dict[str, Any]:
        """Return a display-safe copy of `credentials`.

        Args:
            credentials: Raw credential payload (possibly nested).

        Returns:
            A new mapping with sensitive values replaced by a placeholder. The
            input is never modified.
        """

    @property
    def mode(self) -> RedactorMode:
        """Return the redaction mode."""
        return self._mode
