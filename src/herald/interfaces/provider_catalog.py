"""Interface for the Provider Catalog.

The catalog is the static registry mapping ``(channel, provider_id)`` to a
`ProviderDescriptor` (display name, required credential fields, built-in flag).
It is read-only: lookups have no side effects.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from herald.domain.errors import DomainError, ErrorCode

if TYPE_CHECKING:
    from herald.domain.channels import ChannelType
    from herald.domain.providers import ProviderDescriptor


class ProviderNotFoundError(DomainError):
    """Raised when a channel/provider pair is not in the catalog.

    Attributes:
        channel (str): The requested channel.
        provider_id (str): The requested provider id.
    """

    code = ErrorCode.PROVIDER_NOT_FOUND

    def __init__(self, channel: str, provider_id: str) -> None:
        super().__init__(
            f"Provider ({provider_id}) is not available on channel ({channel})"
        )
        self.channel = channel
        self.provider_id = provider_id


class ProviderCatalog(abc.ABC):
    """Read-only registry of the providers available per channel."""

    @abc.abstractmethod
    def lookup(
        self, channel: ChannelType | str, provider_id: str
    ) -> ProviderDescriptor:
        """Return the descriptor for a provider on a channel.

        Args:
            channel: The channel (enum or its string value).
            provider_id: The provider id; lookup is case-insensitive.

        Returns:
            The matching ProviderDescriptor.

        Raises:
            ProviderNotFoundError: If the channel is unknown or the provider is not
                offered on that channel.
        """

    @abc.abstractmethod
    def providers(
        self, channel: ChannelType | str | None = None
    ) -> list[ProviderDescriptor]:
        """Return every descriptor in catalog order, optionally for one channel."""

    def built_in_providers(self) -> list[ProviderDescriptor]:
        """Return the built-in (no-op) providers seeded into every new environment."""
        return [descriptor for descriptor in self.providers() if descriptor.built_in]

    def is_built_in(self, channel: ChannelType | str, provider_id: str) -> bool:
        """Return True if the provider is a built-in one; unknown providers are not."""
        try:
            return self.lookup(channel, provider_id).built_in
        except ProviderNotFoundError:
            return False
