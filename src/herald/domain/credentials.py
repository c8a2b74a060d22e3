"""Credential validation against a provider's required-field schema.

The validator is deliberately shallow: it only checks that every required key
is present and non-empty when the caller wants the integration active. Any
other keys (including nested mappings such as SMTP ``tlsOptions``) are left
untouched and stored verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import InvalidCredentialsError, MissingCredentialsError

if TYPE_CHECKING:
    from .integration import Credentials
    from .providers import ProviderDescriptor


def _is_empty(value: Any) -> bool:
    # False and 0 are legitimate settings (e.g. secure=False), not missing values.
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Mapping):
        return not value
    return False


def check_shape(credentials: Any) -> Credentials:
    """Return `credentials` as a plain dict, or raise if it is not a string-keyed mapping.

    Raises:
        InvalidCredentialsError: if `credentials` is not a mapping or has non-string keys.
    """
    if credentials is None:
        return {}
    if not isinstance(credentials, Mapping):
        raise InvalidCredentialsError(
            f"expected a mapping, got {type(credentials).__name__}"
        )
    if bad := [key for key in credentials if not isinstance(key, str)]:
        raise InvalidCredentialsError(f"keys must be strings, got {bad!r}")
    return dict(credentials)


def missing_credentials(
    descriptor: ProviderDescriptor, credentials: Credentials | None
) -> tuple[str, ...]:
    """Return the required credential fields that are absent or empty."""
    credentials = credentials or {}
    return tuple(
        name
        for name in descriptor.required_credentials
        if _is_empty(credentials.get(name))
    )


def validate_credentials(
    descriptor: ProviderDescriptor,
    credentials: Credentials | None,
    wants_active: bool,
) -> None:
    """Check that `credentials` allow the requested activation state.

    Args:
        descriptor: The provider whose required fields apply.
        credentials: The credential payload (may be None or empty).
        wants_active: Whether the integration is to be active.

    Raises:
        MissingCredentialsError: If `wants_active` is true and a required field
            is absent or empty. Inactive integrations always validate.
    """
    if not wants_active:
        return
    if missing := missing_credentials(descriptor, credentials):
        raise MissingCredentialsError(descriptor.provider_id, missing)
