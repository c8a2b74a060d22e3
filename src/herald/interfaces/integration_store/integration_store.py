"""Interface for persisting integrations.

Defines the `IntegrationStore` abstraction keyed by organization, environment,
channel and provider. The store owns the uniqueness of
``(environment_id, identifier)``: the check and the insert must be atomic so
that two concurrent creations with the same identifier cannot both succeed.

The contract is public so test harnesses can seed and clean state directly.
Writing through the store bypasses the service layer, which means no provider
lookup, no credential validation and no single-active-provider policy: use it
for fixture setup/teardown only.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING

from herald.domain.channels import ChannelType

if TYPE_CHECKING:
    from herald.domain.integration import Integration


@dataclass(frozen=True, slots=True)
class IntegrationFilter:
    """Conjunctive filter for find_many() and delete_many(); None means "any"."""

    organization_id: str | None = None
    environment_id: str | None = None
    channel: ChannelType | None = None
    provider_id: str | None = None
    identifier: str | None = None
    active: bool | None = None

    def __post_init__(self) -> None:
        if self.channel is not None:
            object.__setattr__(self, "channel", ChannelType(self.channel))
        if self.provider_id is not None:
            object.__setattr__(self, "provider_id", self.provider_id.lower())

    def matches(self, integration: Integration) -> bool:
        """Return True if `integration` satisfies every set criterion."""
        return all(
            expected is None or getattr(integration, name) == expected
            for name, expected in (
                ("organization_id", self.organization_id),
                ("environment_id", self.environment_id),
                ("channel", self.channel),
                ("provider_id", self.provider_id),
                ("identifier", self.identifier),
                ("active", self.active),
            )
        )


class IntegrationStore(abc.ABC):
    """Persistence port for integrations."""

    @abc.abstractmethod
    def create(self, integration: Integration) -> Integration:
        """Insert a new integration.

        The store assigns `created_at` when it is not set.

        Args:
            integration: The record to insert.

        Returns:
            The stored record.

        Raises:
            IdentifierConflictError: If ``(environment_id, identifier)`` is taken.
            IntegrationIdConflictError: If the id is already stored.
            StoreUnavailableError: If the backend fails or times out.
        """

    @abc.abstractmethod
    def get(self, integration_id: str) -> Integration | None:
        """Return the integration with the given id, or None."""

    @abc.abstractmethod
    def find_many(self, integration_filter: IntegrationFilter) -> list[Integration]:
        """Return every integration matching the filter.

        Order is not significant but is stable for an unchanged collection.
        """

    @abc.abstractmethod
    def update(self, integration: Integration) -> Integration:
        """Replace the stored record that has the same id.

        The store assigns `updated_at`.

        Raises:
            IntegrationNotFoundError: If no record has this id.
            IdentifierConflictError: If the (possibly changed) identifier is used by
                another integration in the environment.
            StoreUnavailableError: If the backend fails or times out.
        """

    @abc.abstractmethod
    def delete_many(self, integration_filter: IntegrationFilter) -> int:
        """Delete every integration matching the filter.

        Idempotent: deleting zero rows is not an error.

        Returns:
            The number of deleted integrations.

        Raises:
            UnscopedDeleteError: If the filter has no organization_id.
        """
