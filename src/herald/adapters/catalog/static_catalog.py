"""Static, in-process provider catalog.

The registry below is the single source of truth for which providers HERALD
supports on each channel and which credential fields must be present before an
integration of that provider may be activated.
"""

from __future__ import annotations

from herald.domain.channels import (
    ChannelType,
    ChatProviderId,
    EmailProviderId,
    InAppProviderId,
    PushProviderId,
    SmsProviderId,
    parse_channel,
)
from herald.domain.providers import ProviderDescriptor
from herald.interfaces.provider_catalog import ProviderCatalog, ProviderNotFoundError

PROVIDERS: tuple[ProviderDescriptor, ...] = (
    # --- email ---
    ProviderDescriptor(
        ChannelType.EMAIL,
        EmailProviderId.SENDGRID,
        "SendGrid",
        ("apiKey", "secretKey"),
    ),
    ProviderDescriptor(
        ChannelType.EMAIL,
        EmailProviderId.MAILGUN,
        "Mailgun",
        ("apiKey", "domain", "username"),
    ),
    ProviderDescriptor(
        ChannelType.EMAIL,
        EmailProviderId.POSTMARK,
        "Postmark",
        ("apiKey",),
    ),
    ProviderDescriptor(
        ChannelType.EMAIL,
        EmailProviderId.SES,
        "SES",
        ("apiKey", "secretKey", "region"),
    ),
    ProviderDescriptor(
        ChannelType.EMAIL,
        EmailProviderId.CUSTOM_SMTP,
        "Custom SMTP",
        ("host", "port", "secure", "requireTls"),
    ),
    ProviderDescriptor(
        ChannelType.EMAIL,
        EmailProviderId.HERALD,
        "Herald Email",
        built_in=True,
    ),
    # --- sms ---
    ProviderDescriptor(
        ChannelType.SMS,
        SmsProviderId.TWILIO,
        "Twilio",
        ("accountSid", "token"),
    ),
    ProviderDescriptor(
        ChannelType.SMS,
        SmsProviderId.PLIVO,
        "Plivo",
        ("accountSid", "token"),
    ),
    ProviderDescriptor(
        ChannelType.SMS,
        SmsProviderId.SNS,
        "SNS",
        ("apiKey", "secretKey", "region"),
    ),
    ProviderDescriptor(
        ChannelType.SMS,
        SmsProviderId.HERALD,
        "Herald SMS",
        built_in=True,
    ),
    # --- push ---
    ProviderDescriptor(
        ChannelType.PUSH,
        PushProviderId.FCM,
        "Firebase Cloud Messaging",
        ("serviceAccount",),
    ),
    ProviderDescriptor(
        ChannelType.PUSH,
        PushProviderId.APNS,
        "APNS",
        ("secretKey", "keyId", "teamId", "bundleId"),
    ),
    ProviderDescriptor(
        ChannelType.PUSH,
        PushProviderId.EXPO,
        "Expo Push",
        ("apiKey",),
    ),
    # --- chat: webhook urls live on subscribers, so no credentials here ---
    ProviderDescriptor(ChannelType.CHAT, ChatProviderId.SLACK, "Slack"),
    ProviderDescriptor(ChannelType.CHAT, ChatProviderId.DISCORD, "Discord"),
    ProviderDescriptor(ChannelType.CHAT, ChatProviderId.MSTEAMS, "MSTeams"),
    # --- in-app ---
    ProviderDescriptor(ChannelType.IN_APP, InAppProviderId.HERALD, "Herald In-App"),
)


class StaticProviderCatalog(ProviderCatalog):
    """ProviderCatalog backed by an immutable tuple of descriptors."""

    def __init__(self, providers: tuple[ProviderDescriptor, ...] = PROVIDERS) -> None:
        self._providers = providers
        self._index = {(p.channel, p.provider_id): p for p in providers}

    def lookup(
        self, channel: ChannelType | str, provider_id: str
    ) -> ProviderDescriptor:
        try:
            channel_type = ChannelType.from_string(channel)
        except ValueError as e:
            raise ProviderNotFoundError(str(channel), provider_id) from e
        key = (channel_type, provider_id.lower())
        if (descriptor := self._index.get(key)) is None:
            raise ProviderNotFoundError(channel_type.value, key[1])
        return descriptor

    def providers(
        self, channel: ChannelType | str | None = None
    ) -> list[ProviderDescriptor]:
        if channel is None:
            return list(self._providers)
        wanted = parse_channel(channel)
        return [p for p in self._providers if p.channel is wanted]
