"""HERALD environments CLI: register and list an organization's environments."""

from __future__ import annotations

import click
import click_extra as clickx

from herald.service_layer.commands import CreateEnvironment
from herald.service_layer.queries import ListEnvironments

from .app import dispatch, load_app
from .helpers import success
from .helpers.render import echo_json, environment_to_dict, print_environments

ORGANIZATION_ENV = "HERALD_ORGANIZATION_ID"

organization_option = click.option(
    "--organization",
    "-o",
    "organization_id",
    required=True,
    envvar=ORGANIZATION_ENV,
    show_envvar=True,
    help="Organization that owns the environments.",
)
json_option = click.option(
    "--json", "as_json", is_flag=True, help="Emit JSON instead of a table."
)


@click.group(cls=clickx.ExtraGroup)
def environments() -> None:
    """Environment management commands."""


@environments.command()
@organization_option
@click.argument("name")
@click.option(
    "--seed/--no-seed",
    default=True,
    show_default=True,
    help="Seed the environment with active built-in integrations.",
)
@json_option
def create(organization_id: str, name: str, seed: bool, as_json: bool) -> None:
    """Create environment NAME for an organization."""
    app = load_app()
    environment = dispatch(
        app.message_bus,
        CreateEnvironment(
            organization_id=organization_id, name=name, seed_built_in=seed
        ),
    )
    if as_json:
        echo_json(environment_to_dict(environment))
    else:
        click.echo(environment.id)
    success(f"Environment '{environment.name}' created")


@environments.command(name="list")
@organization_option
@json_option
def list_environments(organization_id: str, as_json: bool) -> None:
    """List an organization's environments."""
    app = load_app()
    found = dispatch(app.message_bus, ListEnvironments(organization_id=organization_id))
    if as_json:
        echo_json([environment_to_dict(env) for env in found])
    else:
        print_environments(found)
