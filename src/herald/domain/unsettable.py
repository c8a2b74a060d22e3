"""Tri-state fields for integration updates.

An update command leaves a field alone, clears it, or sets it::

    UpdateIntegration(..., name=UNSET)        # keep the stored name
    UpdateIntegration(..., credentials=None)  # drop every stored credential
    UpdateIntegration(..., active=True)       # set a new value

`IntegrationPatch` turns those three states into the values to store and
rejects the ones an integration cannot hold (no name, a blank identifier...).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import InvalidPatchError

T = TypeVar("T")


def _get_unset() -> "_UnsetType":
    return UNSET


@dataclass(frozen=True)
class _UnsetType:
    """The "not given" marker of a patch field; unlike None it never clears."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self):  # pickle back to the singleton
        return (_get_unset, ())


UNSET = _UnsetType()

type Unsettable[T] = T | _UnsetType | None


def is_set(value: object) -> bool:
    """Return True unless `value` is the UNSET marker."""
    return not isinstance(value, _UnsetType)


@dataclass(frozen=True, slots=True)
class IntegrationPatch:
    """Resolve the fields of one update against the stored integration.

    Attributes:
        integration_id: Id of the integration being updated, used in errors.
    """

    integration_id: str

    def required(self, field: str, value: Unsettable[T], current: T) -> T:
        """Keep `current` on UNSET, else return `value`.

        Raises:
            InvalidPatchError: `value` is None, or a blank string.
        """
        if not is_set(value):
            return current
        if value is None:
            raise InvalidPatchError(self.integration_id, f"{field} cannot be cleared")
        if isinstance(value, str) and not value.strip():
            raise InvalidPatchError(self.integration_id, f"{field} cannot be blank")
        return value  # type: ignore[return-value]

    def credentials(
        self,
        value: Unsettable[Mapping[str, Any]],
        current: Mapping[str, Any],
    ) -> Mapping[str, Any] | None:
        """Keep `current` on UNSET; None clears; a mapping replaces the whole set."""
        if not is_set(value):
            return current
        return value  # type: ignore[return-value]
