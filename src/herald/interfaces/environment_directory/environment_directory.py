"""Interface for looking up the environments an organization owns."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from herald.domain.environment import Environment


class EnvironmentDirectory(abc.ABC):
    """Registry of organization-scoped environments."""

    @abc.abstractmethod
    def get(self, environment_id: str) -> Environment | None:
        """Return the environment with this id, or None."""

    @abc.abstractmethod
    def find_by_name(self, organization_id: str, name: str) -> Environment | None:
        """Return the organization's environment with this name, or None.

        Note:
            Name lookup is case-sensitive ("Production" and "production" differ).
        """

    @abc.abstractmethod
    def list(self, organization_id: str) -> list[Environment]:
        """Return the organization's environments in creation order."""

    @abc.abstractmethod
    def add(self, environment: Environment) -> Environment:
        """Register a new environment; the directory assigns `created_at`.

        Raises:
            EnvironmentAlreadyExistsError: If the id is taken or the organization
                already has an environment with this name.
        """
