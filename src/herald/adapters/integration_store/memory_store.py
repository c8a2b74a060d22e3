"""In-memory IntegrationStore implementation."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone

from herald.domain.integration import Integration
from herald.interfaces.integration_store import (
    IdentifierConflictError,
    IntegrationFilter,
    IntegrationIdConflictError,
    IntegrationNotFoundError,
    IntegrationStore,
    UnscopedDeleteError,
)


class InMemoryIntegrationStore(IntegrationStore):
    """Dict-backed IntegrationStore for tests and single-process use.

    A lock makes every check-and-write atomic, so it may be shared between
    threads. Records are copied on the way in and out; callers never hold a
    reference to stored state. Listing order is insertion order.
    """

    def __init__(self) -> None:
        self._records: dict[str, Integration] = {}
        self._lock = threading.Lock()

    # --- helpers ---

    def _identifier_owner(self, environment_id: str, identifier: str) -> str | None:
        for record in self._records.values():
            if (
                record.environment_id == environment_id
                and record.identifier == identifier
            ):
                return record.id
        return None

    # --- writes ---

    def create(self, integration: Integration) -> Integration:
        with self._lock:
            if integration.id in self._records:
                raise IntegrationIdConflictError(integration.id)
            if self._identifier_owner(
                integration.environment_id, integration.identifier
            ):
                raise IdentifierConflictError(
                    integration.environment_id, integration.identifier
                )
            stored = replace(
                integration,
                created_at=integration.created_at or datetime.now(timezone.utc),
            )
            self._records[stored.id] = stored
            return replace(stored)

    def update(self, integration: Integration) -> Integration:
        with self._lock:
            if (current := self._records.get(integration.id)) is None:
                raise IntegrationNotFoundError(integration.id)
            owner = self._identifier_owner(
                integration.environment_id, integration.identifier
            )
            if owner is not None and owner != integration.id:
                raise IdentifierConflictError(
                    integration.environment_id, integration.identifier
                )
            stored = replace(
                integration,
                created_at=current.created_at,
                updated_at=datetime.now(timezone.utc),
            )
            self._records[stored.id] = stored
            return replace(stored)

    def delete_many(self, integration_filter: IntegrationFilter) -> int:
        if integration_filter.organization_id is None:
            raise UnscopedDeleteError
        with self._lock:
            doomed = [
                key
                for key, record in self._records.items()
                if integration_filter.matches(record)
            ]
            for key in doomed:
                del self._records[key]
            return len(doomed)

    # --- reads ---

    def get(self, integration_id: str) -> Integration | None:
        with self._lock:
            record = self._records.get(integration_id)
            return None if record is None else replace(record)

    def find_many(self, integration_filter: IntegrationFilter) -> list[Integration]:
        with self._lock:
            return [
                replace(record)
                for record in self._records.values()
                if integration_filter.matches(record)
            ]
