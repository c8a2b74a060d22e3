"""Notification channels and the provider identifiers available on each."""

from enum import Enum

from .errors import UnknownChannelError


class ChannelType(str, Enum):
    """Notification delivery category."""

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    CHAT = "chat"
    IN_APP = "in_app"

    @classmethod
    def from_string(cls, raw: "ChannelType | str") -> "ChannelType":
        """Normalize a channel name (case-insensitive, `-` or `_`) to a ChannelType.

        Raises:
            ValueError: if the name is not a known channel.
        """
        if isinstance(raw, cls):
            return raw
        return cls(raw.strip().lower().replace("-", "_"))


def parse_channel(raw: ChannelType | str) -> ChannelType:
    """Like `ChannelType.from_string`, but raise a HeraldError for unknown names.

    Raises:
        UnknownChannelError: if the name is not a known channel.
    """
    try:
        return ChannelType.from_string(raw)
    except (ValueError, AttributeError) as e:
        raise UnknownChannelError(str(raw)) from e


class EmailProviderId(str, Enum):
    """Providers available on the email channel."""

    SENDGRID = "sendgrid"
    MAILGUN = "mailgun"
    POSTMARK = "postmark"
    SES = "ses"
    CUSTOM_SMTP = "custom-smtp"
    HERALD = "herald-email"


class SmsProviderId(str, Enum):
    """Providers available on the SMS channel."""

    TWILIO = "twilio"
    PLIVO = "plivo"
    SNS = "sns"
    HERALD = "herald-sms"


class PushProviderId(str, Enum):
    """Providers available on the push channel."""

    FCM = "fcm"
    APNS = "apns"
    EXPO = "expo"


class ChatProviderId(str, Enum):
    """Providers available on the chat channel."""

    SLACK = "slack"
    DISCORD = "discord"
    MSTEAMS = "msteams"


class InAppProviderId(str, Enum):
    """Providers available on the in-app channel."""

    HERALD = "herald-in-app"
