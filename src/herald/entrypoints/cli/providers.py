"""HERALD providers CLI: browse the provider catalog (no database needed)."""

from __future__ import annotations

import click
import click_extra as clickx

from herald.bootstrap import bootstrap_catalog
from herald.domain.channels import ChannelType
from herald.service_layer.queries import ListProviders

from .app import dispatch
from .helpers.render import echo_json, print_providers, provider_to_dict

CHANNEL_CHOICE = click.Choice([c.value for c in ChannelType], case_sensitive=False)


@click.group(cls=clickx.ExtraGroup)
def providers() -> None:
    """Provider catalog commands."""


@providers.command(name="list")
@click.option("--channel", type=CHANNEL_CHOICE, help="Only show this channel.")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table.")
def list_providers(channel: str | None, as_json: bool) -> None:
    """List the providers available per channel and their required credentials."""
    descriptors = dispatch(bootstrap_catalog(), ListProviders(channel=channel))
    if as_json:
        echo_json([provider_to_dict(d) for d in descriptors])
    else:
        print_providers(descriptors)
