"""Interface for provider connectivity probes.

A probe verifies that a provider is reachable with the given credentials
before an integration is activated. It is only consulted when the caller asks
for a check; otherwise no probe runs.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from herald.domain.errors import DomainError, ErrorCode

if TYPE_CHECKING:
    from herald.domain.integration import Credentials
    from herald.domain.providers import ProviderDescriptor

# pylint: disable=too-few-public-methods


class ProviderCheckFailedError(DomainError):
    """Raised when a provider connectivity check fails.

    Attributes:
        provider_id (str): The provider that was probed.
        reason (str): Human-readable failure reason.
    """

    code = ErrorCode.PROVIDER_CHECK_FAILED

    def __init__(self, provider_id: str, reason: str) -> None:
        super().__init__(f"Provider ({provider_id}) check failed: {reason}")
        self.provider_id = provider_id
        self.reason = reason


class ProviderProbe(abc.ABC):
    """Contract for verifying provider reachability."""

    @abc.abstractmethod
    def verify(self, descriptor: ProviderDescriptor, credentials: Credentials) -> None:
        """Verify the provider accepts `credentials`.

        Raises:
            ProviderCheckFailedError: If the provider cannot be reached or rejects
                the credentials.
        """
