"""Render integrations, environments and providers for the terminal.

Tables go through `rich`; ``--json`` output is plain JSON on stdout. Credentials
always pass through the redactor first.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from herald.domain.environment import Environment
    from herald.domain.integration import Integration
    from herald.domain.providers import ProviderDescriptor
    from herald.interfaces.redactor import Redactor


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def integration_to_dict(integration: Integration, redactor: Redactor) -> dict[str, Any]:
    """Return a JSON-serializable view of an integration with masked credentials."""
    return {
        "id": integration.id,
        "identifier": integration.identifier,
        "name": integration.name,
        "organization_id": integration.organization_id,
        "environment_id": integration.environment_id,
        "channel": integration.channel.value,
        "provider_id": integration.provider_id,
        "active": integration.active,
        "credentials": redactor.redact_credentials(integration.credentials),
        "created_at": _iso(integration.created_at),
        "updated_at": _iso(integration.updated_at),
    }


def environment_to_dict(environment: Environment) -> dict[str, Any]:
    """Return a JSON-serializable view of an environment."""
    return {
        "id": environment.id,
        "organization_id": environment.organization_id,
        "name": environment.name,
        "created_at": _iso(environment.created_at),
    }


def provider_to_dict(descriptor: ProviderDescriptor) -> dict[str, Any]:
    """Return a JSON-serializable view of a provider descriptor."""
    return {
        "channel": descriptor.channel.value,
        "provider_id": descriptor.provider_id,
        "display_name": descriptor.display_name,
        "required_credentials": list(descriptor.required_credentials),
        "built_in": descriptor.built_in,
    }


def echo_json(payload: Any) -> None:
    """Write `payload` as indented JSON to stdout."""
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


def _print(table: Table) -> None:
    Console(file=click.get_text_stream("stdout"), soft_wrap=True).print(table)


def print_integrations(integrations: Sequence[Integration], redactor: Redactor) -> None:
    """Print integrations as a table (credentials masked)."""
    table = Table(title="Integrations")
    for column in ("ID", "Identifier", "Channel", "Provider", "Active", "Environment"):
        table.add_column(column)
    table.add_column("Credentials", overflow="fold")
    for integration in integrations:
        table.add_row(
            integration.id,
            integration.identifier,
            integration.channel.value,
            integration.provider_id,
            "yes" if integration.active else "no",
            integration.environment_id,
            json.dumps(redactor.redact_credentials(integration.credentials)),
        )
    _print(table)


def print_environments(environments: Sequence[Environment]) -> None:
    """Print environments as a table."""
    table = Table(title="Environments")
    for column in ("ID", "Name", "Created"):
        table.add_column(column)
    for environment in environments:
        table.add_row(
            environment.id, environment.name, _iso(environment.created_at) or ""
        )
    _print(table)


def print_providers(descriptors: Sequence[ProviderDescriptor]) -> None:
    """Print provider descriptors as a table."""
    table = Table(title="Providers")
    for column in ("Channel", "Provider", "Name", "Required credentials", "Built-in"):
        table.add_column(column)
    for descriptor in descriptors:
        table.add_row(
            descriptor.channel.value,
            descriptor.provider_id,
            descriptor.display_name,
            ", ".join(descriptor.required_credentials) or "-",
            "yes" if descriptor.built_in else "no",
        )
    _print(table)
