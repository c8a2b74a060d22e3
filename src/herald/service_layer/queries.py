"""Module defining Queries (read-only requests routed by the message bus)."""

from dataclasses import dataclass

from .commands import CallerContext


@dataclass(frozen=True)
class Query:
    """Base class for all queries."""


@dataclass(frozen=True)
class ListIntegrations(Query):
    """List the caller organization's integrations.

    With no `environment_id` every environment of the organization is included.
    """

    context: CallerContext
    environment_id: str | None = None
    channel: str | None = None
    active: bool | None = None


@dataclass(frozen=True)
class ListEnvironments(Query):
    """List an organization's environments."""

    organization_id: str


@dataclass(frozen=True)
class ListProviders(Query):
    """List the catalog's providers, optionally for one channel."""

    channel: str | None = None
