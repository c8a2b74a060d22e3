"""Unit tests for the Integration and Environment entities."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from herald.domain.channels import ChannelType
from herald.domain.environment import Environment
from herald.domain.integration import Integration, InvalidIntegrationError
from herald.domain.providers import ProviderDescriptor

# pylint: disable=magic-value-comparison


def _integration(**overrides) -> Integration:
    base = {
        "id": "01J0000000000000000000000A",
        "identifier": "sendgrid-00000a",
        "organization_id": "org-acme",
        "environment_id": "env-dev",
        "channel": "email",
        "provider_id": "SendGrid",
        "name": "SendGrid",
    }
    base.update(overrides)
    return Integration(**base)


def test_normalizes_channel_and_provider():
    """Channel strings become ChannelType and provider ids are lowercased."""
    integration = _integration()

    assert integration.channel is ChannelType.EMAIL
    assert integration.provider_id == "sendgrid"
    assert integration.active is False
    assert integration.credentials == {}


def test_credentials_are_deep_copied():
    """Mutating the caller's payload does not change the entity."""
    payload = {"apiKey": "k", "tlsOptions": {"ciphers": "HIGH"}}
    integration = _integration(credentials=payload)

    payload["apiKey"] = "changed"
    payload["tlsOptions"]["ciphers"] = "LOW"

    assert integration.credentials == {"apiKey": "k", "tlsOptions": {"ciphers": "HIGH"}}


def test_is_immutable():
    """Integrations are frozen snapshots."""
    integration = _integration()
    with pytest.raises(FrozenInstanceError):
        integration.active = True  # type: ignore[misc]


@pytest.mark.parametrize(
    "field", ["id", "identifier", "organization_id", "environment_id"]
)
def test_rejects_empty_keys(field):
    """Scoping and identity fields may not be empty."""
    with pytest.raises(InvalidIntegrationError, match=f"{field} must not be empty"):
        _integration(**{field: ""})


def test_rejects_naive_timestamps():
    """Timestamps must be timezone-aware UTC."""
    with pytest.raises(InvalidIntegrationError, match="timezone-aware UTC"):
        _integration(created_at=datetime(2025, 1, 1))


def test_rejects_non_utc_timestamps():
    """A non-zero UTC offset is refused."""
    paris = timezone(timedelta(hours=1))
    with pytest.raises(InvalidIntegrationError, match="updated_at"):
        _integration(updated_at=datetime(2025, 1, 1, tzinfo=paris))


def test_deactivate_returns_a_copy():
    """Deactivation returns a new snapshot and keeps everything else."""
    created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    integration = _integration(created_at=created_at, active=True)

    inactive = integration.deactivate()

    assert integration.active is True
    assert inactive.active is False
    assert inactive.created_at == created_at
    assert inactive.identifier == integration.identifier


def test_provider_descriptor_normalizes():
    """Descriptors normalize like integrations and store a tuple of fields."""
    descriptor = ProviderDescriptor("sms", "Twilio", "Twilio", ["accountSid", "token"])

    assert descriptor.channel is ChannelType.SMS
    assert descriptor.provider_id == "twilio"
    assert descriptor.required_credentials == ("accountSid", "token")
    assert descriptor.built_in is False


def test_environment_ownership():
    """An environment belongs to exactly one organization."""
    environment = Environment(
        id="env-dev", organization_id="org-acme", name="Development"
    )

    assert environment.is_owned_by("org-acme")
    assert not environment.is_owned_by("org-globex")
