"""The Integration entity: a configured, credentialed provider in one environment."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import TypeAlias

from .channels import ChannelType

# pylint: disable=too-many-instance-attributes

CredentialValue: TypeAlias = (
    str | bool | int | float | None | Mapping[str, "CredentialValue"]
)
Credentials: TypeAlias = Mapping[str, CredentialValue]


class InvalidIntegrationError(ValueError):
    """Raised when an Integration is constructed with inconsistent fields."""

    def __init__(self, integration_id: str, reason: str) -> None:
        super().__init__(f"Invalid integration ({integration_id}): {reason}")
        self.integration_id = integration_id
        self.reason = reason


@dataclass(frozen=True, slots=True)
class Integration:
    """Immutable snapshot of a stored integration.

    Conventions:
      - `id` is assigned once (ULID) and never changes.
      - `identifier` is unique within `environment_id`.
      - `channel` is normalized to a `ChannelType`; `provider_id` to lowercase.
      - `credentials` is deep-copied on construction so callers cannot mutate
        a stored record through a shared reference.
      - `created_at`/`updated_at` are tz-aware UTC when set; the store assigns them.
    """

    id: str
    identifier: str
    organization_id: str
    environment_id: str
    channel: ChannelType
    provider_id: str
    name: str
    credentials: Credentials = field(default_factory=dict)
    active: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "channel", ChannelType(self.channel))
        object.__setattr__(self, "provider_id", self.provider_id.lower())
        object.__setattr__(self, "credentials", copy.deepcopy(dict(self.credentials)))
        object.__setattr__(self, "active", bool(self.active))

        for name in ("id", "identifier", "organization_id", "environment_id"):
            if not getattr(self, name):
                raise InvalidIntegrationError(self.id, f"{name} must not be empty")
        for name in ("created_at", "updated_at"):
            value = getattr(self, name)
            if value is not None and (
                value.tzinfo is None or value.utcoffset() != timedelta(0)
            ):
                raise InvalidIntegrationError(
                    self.id, f"{name} must be timezone-aware UTC"
                )

    # --- state transitions ---

    def deactivate(self) -> Integration:
        """Return a copy marked inactive."""
        return replace(self, active=False)
