"""Module defining Commands."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from herald.domain.unsettable import UNSET, Unsettable

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class CallerContext:
    """Who is asking: the caller's organization and current environment."""

    organization_id: str
    environment_id: str


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class CreateIntegration(Command):
    """Command to configure a provider for a channel in an environment.

    `environment_id` targets another environment of the caller's organization;
    when None the caller's current environment is used. `identifier` is
    generated from the provider display name when None or blank. `check` asks
    for a connectivity probe before activation.
    """

    context: CallerContext
    channel: str
    provider_id: str
    credentials: Mapping[str, Any] | None = None
    active: bool = False
    name: str | None = None
    identifier: str | None = None
    environment_id: str | None = None
    check: bool = False


@dataclass(frozen=True)
class UpdateIntegration(Command):
    """Command to patch an existing integration; UNSET fields are kept.

    `credentials` replaces the stored payload as a whole; None clears it.
    """

    context: CallerContext
    integration_id: str
    name: Unsettable[str] = UNSET
    identifier: Unsettable[str] = UNSET
    credentials: Unsettable[Mapping[str, Any]] = UNSET
    active: Unsettable[bool] = UNSET
    check: bool = False


@dataclass(frozen=True)
class DeleteIntegrations(Command):
    """Command to delete the caller organization's integrations matching the filter."""

    context: CallerContext
    environment_id: str | None = None
    channel: str | None = None
    provider_id: str | None = None


@dataclass(frozen=True)
class CreateEnvironment(Command):
    """Command to register an environment and seed its built-in integrations."""

    organization_id: str
    name: str
    seed_built_in: bool = True
