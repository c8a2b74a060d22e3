"""Domain-layer error definitions."""

from enum import Enum
from typing import ClassVar

# ============================================================================
#                           Error codes
# ============================================================================


class ErrorCode(str, Enum):
    """Machine-readable error codes carried by every HERALD error."""

    PROVIDER_NOT_FOUND = "provider_not_found"
    INVALID_CHANNEL = "invalid_channel"
    MISSING_CREDENTIALS = "missing_credentials"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_PATCH = "invalid_patch"
    FIELD_TOO_LONG = "field_too_long"
    IDENTIFIER_CONFLICT = "identifier_conflict"
    INVALID_ENVIRONMENT = "invalid_environment"
    ENVIRONMENT_CONFLICT = "environment_conflict"
    INTEGRATION_NOT_FOUND = "integration_not_found"
    ACTIVE_PROVIDER_CONFLICT = "active_provider_conflict"
    PROVIDER_CHECK_FAILED = "provider_check_failed"
    STORE_UNAVAILABLE = "store_unavailable"
    INTERNAL = "internal"


# ============================================================================
#                           General domain errors
# ============================================================================


class HeraldError(Exception):
    """Base class for errors reported to HERALD callers."""

    code: ClassVar[ErrorCode] = ErrorCode.INTERNAL


class DomainError(HeraldError):
    """Base class for domain-layer errors."""


# ============================================================================
#                   Integration related errors
# ============================================================================


class MissingCredentialsError(DomainError):
    """Raised when activating an integration whose required credentials are missing.

    Attributes:
        provider_id: The provider whose schema was not satisfied.
        missing: Names of the required fields that are absent or empty.
    """

    code = ErrorCode.MISSING_CREDENTIALS
    MESSAGE = "The credentials are required to activate the integration"

    def __init__(self, provider_id: str, missing: tuple[str, ...]) -> None:
        super().__init__(self.MESSAGE)
        self.provider_id = provider_id
        self.missing = missing


class ActiveProviderConflictError(DomainError):
    """Raised when a channel already has an active provider and multiple are not allowed.

    Attributes:
        channel: The channel being activated.
        environment_id: The environment being activated in.
        active_ids: IDs of the integrations that are already active.
    """

    code = ErrorCode.ACTIVE_PROVIDER_CONFLICT

    def __init__(
        self, channel: str, environment_id: str, active_ids: tuple[str, ...]
    ) -> None:
        super().__init__(
            f"Another provider is already active on channel {channel} "
            f"in environment {environment_id}"
        )
        self.channel = channel
        self.environment_id = environment_id
        self.active_ids = active_ids


class InvalidCredentialsError(DomainError):
    """Raised when a credentials payload is not a mapping with string keys."""

    code = ErrorCode.INVALID_CREDENTIALS

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid credentials: {reason}")
        self.reason = reason


class InvalidPatchError(DomainError):
    """Raised when an update clears or blanks a field that must keep a value."""

    code = ErrorCode.INVALID_PATCH

    def __init__(self, integration_id: str, reason: str) -> None:
        super().__init__(f"Invalid integration ({integration_id}) patch: {reason}")
        self.integration_id = integration_id
        self.reason = reason


class FieldTooLongError(DomainError):
    """Raised when a caller-chosen name or identifier exceeds its stored length.

    Attributes:
        field: Name of the offending field.
        limit: Maximum number of characters the field holds.
    """

    code = ErrorCode.FIELD_TOO_LONG

    def __init__(self, field: str, limit: int) -> None:
        super().__init__(f"{field} must be at most {limit} characters long")
        self.field = field
        self.limit = limit


class UnknownChannelError(DomainError):
    """Raised when a channel name does not match any ChannelType."""

    code = ErrorCode.INVALID_CHANNEL

    def __init__(self, channel: str) -> None:
        super().__init__(f"Unknown channel ({channel})")
        self.channel = channel
