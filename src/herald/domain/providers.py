"""Provider descriptors: the read model published by the provider catalog."""

from __future__ import annotations

from dataclasses import dataclass

from .channels import ChannelType


@dataclass(frozen=True, slots=True)
class ProviderDescriptor:
    """Immutable description of a provider available on a channel.

    Conventions:
      - `provider_id` is the canonical lowercase id (e.g. "sendgrid").
      - `required_credentials` lists the credential keys that must be present
        and non-empty before an integration of this provider can be activated.
      - `built_in` marks the no-op providers every environment starts with; they
        are excluded from the single-active-provider policy.
    """

    channel: ChannelType
    provider_id: str
    display_name: str
    required_credentials: tuple[str, ...] = ()
    built_in: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "channel", ChannelType(self.channel))
        object.__setattr__(self, "provider_id", self.provider_id.lower())
        object.__setattr__(
            self, "required_credentials", tuple(self.required_credentials)
        )
