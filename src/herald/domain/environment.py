"""The Environment entity: an organization-scoped deployment context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEVELOPMENT = "Development"
PRODUCTION = "Production"


@dataclass(frozen=True, slots=True)
class Environment:
    """Immutable read model for an environment.

    `name` is unique per `organization_id` (e.g. "Development", "Production").
    """

    id: str
    organization_id: str
    name: str
    created_at: datetime | None = None

    def is_owned_by(self, organization_id: str) -> bool:
        """Return True if the environment belongs to the given organization."""
        return self.organization_id == organization_id
