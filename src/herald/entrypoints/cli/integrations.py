"""HERALD integrations CLI: create, list, update and delete provider integrations.

Every command acts on behalf of a caller identified by ``--organization`` and
``--environment`` (or ``HERALD_ORGANIZATION_ID`` / ``HERALD_ENVIRONMENT_ID``).
Credentials are given as repeatable ``--credential KEY=VALUE`` flags and/or a
``--credentials-json`` object; they are masked whenever they are printed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click
import click_extra as clickx

from herald.domain.channels import ChannelType
from herald.domain.unsettable import UNSET
from herald.service_layer.commands import (
    CallerContext,
    CreateIntegration,
    DeleteIntegrations,
    UpdateIntegration,
)
from herald.service_layer.queries import ListIntegrations

from .app import dispatch, load_app
from .environments import ORGANIZATION_ENV
from .helpers import parse_credentials, parse_credentials_json, success, warn
from .helpers.render import echo_json, integration_to_dict, print_integrations

# pylint: disable=too-many-arguments,too-many-positional-arguments

ENVIRONMENT_ENV = "HERALD_ENVIRONMENT_ID"

CHANNEL_CHOICE = click.Choice([c.value for c in ChannelType], case_sensitive=False)

DELETE_WARNING = "This will permanently delete the matching integrations."


def caller_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --organization/--environment options identifying the caller."""
    fn = click.option(
        "--environment",
        "-e",
        "environment_id",
        envvar=ENVIRONMENT_ENV,
        show_envvar=True,
        help="The caller's current environment.",
    )(fn)
    return click.option(
        "--organization",
        "-o",
        "organization_id",
        required=True,
        envvar=ORGANIZATION_ENV,
        show_envvar=True,
        help="The caller's organization.",
    )(fn)


def credential_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --credential/--credentials-json options."""
    fn = click.option(
        "--credentials-json",
        "credentials_json",
        callback=parse_credentials_json,
        help='Credentials as a JSON object, e.g. \'{"port": 587, "secure": true}\'.',
    )(fn)
    return click.option(
        "--credential",
        "-c",
        "credential_pairs",
        multiple=True,
        callback=parse_credentials,
        metavar="KEY=VALUE",
        help="A credential field (repeatable); overrides --credentials-json keys.",
    )(fn)


json_option = click.option(
    "--json", "as_json", is_flag=True, help="Emit JSON instead of a table."
)


def _merge_credentials(
    credentials_json: dict[str, Any] | None, credential_pairs: dict[str, Any]
) -> dict[str, Any] | None:
    if credentials_json is None and not credential_pairs:
        return None
    return {**(credentials_json or {}), **credential_pairs}


@click.group(cls=clickx.ExtraGroup)
def integrations() -> None:
    """Integration management commands."""


@integrations.command()
@caller_options
@click.argument("channel", type=CHANNEL_CHOICE)
@click.argument("provider_id")
@credential_options
@click.option("--name", help="Display name (defaults to the provider's name).")
@click.option(
    "--identifier", help="Unique identifier in the environment (generated if omitted)."
)
@click.option(
    "--target-environment",
    "target_environment_id",
    help="Create in another environment of the organization.",
)
@click.option(
    "--active/--inactive",
    default=False,
    show_default=True,
    help="Activate the integration (requires all required credentials).",
)
@click.option("--check", is_flag=True, help="Probe the provider before activating.")
@json_option
def create(
    organization_id: str,
    environment_id: str | None,
    channel: str,
    provider_id: str,
    credentials_json: dict[str, Any] | None,
    credential_pairs: dict[str, Any],
    name: str | None,
    identifier: str | None,
    target_environment_id: str | None,
    active: bool,
    check: bool,
    as_json: bool,
) -> None:
    """Configure PROVIDER_ID on CHANNEL in the caller's (or target) environment."""
    app = load_app()
    integration = dispatch(
        app.message_bus,
        CreateIntegration(
            context=CallerContext(organization_id, environment_id or ""),
            channel=channel,
            provider_id=provider_id,
            credentials=_merge_credentials(credentials_json, credential_pairs),
            active=active,
            name=name,
            identifier=identifier,
            environment_id=target_environment_id,
            check=check,
        ),
    )
    if as_json:
        echo_json(integration_to_dict(integration, app.redactor))
    else:
        print_integrations([integration], app.redactor)
    success(f"Integration '{integration.identifier}' created")


@integrations.command(name="list")
@caller_options
@click.option("--channel", type=CHANNEL_CHOICE, help="Only show this channel.")
@click.option(
    "--all-environments",
    is_flag=True,
    help="List every environment of the organization, ignoring --environment.",
)
@json_option
def list_integrations(
    organization_id: str,
    environment_id: str | None,
    channel: str | None,
    all_environments: bool,
    as_json: bool,
) -> None:
    """List the organization's integrations, built-in providers included."""
    app = load_app()
    scope = None if all_environments else environment_id
    found = dispatch(
        app.message_bus,
        ListIntegrations(
            context=CallerContext(organization_id, environment_id or ""),
            environment_id=scope,
            channel=channel,
        ),
    )
    if as_json:
        echo_json([integration_to_dict(i, app.redactor) for i in found])
    else:
        print_integrations(found, app.redactor)


@integrations.command()
@caller_options
@click.argument("integration_id")
@credential_options
@click.option(
    "--clear-credentials", is_flag=True, help="Remove every stored credential."
)
@click.option("--name", help="New display name.")
@click.option("--identifier", help="New identifier.")
@click.option(
    "--activate/--deactivate",
    "active",
    default=None,
    help="Change the activation state (left unchanged if omitted).",
)
@click.option("--check", is_flag=True, help="Probe the provider before activating.")
@json_option
def update(
    organization_id: str,
    environment_id: str | None,
    integration_id: str,
    credentials_json: dict[str, Any] | None,
    credential_pairs: dict[str, Any],
    clear_credentials: bool,
    name: str | None,
    identifier: str | None,
    active: bool | None,
    check: bool,
    as_json: bool,
) -> None:
    """Update INTEGRATION_ID. Given credentials replace the stored ones as a whole."""
    credentials = _merge_credentials(credentials_json, credential_pairs)
    if clear_credentials and credentials is not None:
        raise click.UsageError(
            "--clear-credentials cannot be combined with --credential(s-json)"
        )

    app = load_app()
    integration = dispatch(
        app.message_bus,
        UpdateIntegration(
            context=CallerContext(organization_id, environment_id or ""),
            integration_id=integration_id,
            name=UNSET if name is None else name,
            identifier=UNSET if identifier is None else identifier,
            credentials=(
                None
                if clear_credentials
                else UNSET if credentials is None else credentials
            ),
            active=UNSET if active is None else active,
            check=check,
        ),
    )
    if as_json:
        echo_json(integration_to_dict(integration, app.redactor))
    else:
        print_integrations([integration], app.redactor)
    success(f"Integration '{integration.identifier}' updated")


@integrations.command()
@caller_options
@click.option("--channel", type=CHANNEL_CHOICE, help="Only delete on this channel.")
@click.option("--provider", "provider_id", help="Only delete this provider.")
@click.option(
    "--all-environments",
    is_flag=True,
    help="Delete across every environment of the organization.",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Do not prompt.")
def delete(
    organization_id: str,
    environment_id: str | None,
    channel: str | None,
    provider_id: str | None,
    all_environments: bool,
    assume_yes: bool,
) -> None:
    """Delete the organization's integrations matching the filters."""
    if not all_environments and not environment_id:
        raise click.UsageError("Pass --environment or --all-environments.")
    if not assume_yes:
        warn(DELETE_WARNING)
        click.confirm("Are you sure you want to proceed?", abort=True)

    app = load_app()
    deleted = dispatch(
        app.message_bus,
        DeleteIntegrations(
            context=CallerContext(organization_id, environment_id or ""),
            environment_id=None if all_environments else environment_id,
            channel=channel,
            provider_id=provider_id,
        ),
    )
    click.echo(deleted)
    success(f"Deleted {deleted} integration(s)")
