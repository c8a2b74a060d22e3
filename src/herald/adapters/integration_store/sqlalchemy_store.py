"""Implementation of IntegrationStore using SQLAlchemy Core."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, OperationalError

from herald.adapters.db.dialects import DialectName, insert_ignoring_conflicts
from herald.adapters.db.schema import integrations
from herald.domain.channels import ChannelType
from herald.domain.integration import Integration
from herald.interfaces.integration_store import (
    IdentifierConflictError,
    IntegrationFilter,
    IntegrationIdConflictError,
    IntegrationNotFoundError,
    IntegrationStore,
    StoreUnavailableError,
    UnscopedDeleteError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from sqlalchemy.engine import Connection
    from sqlalchemy.sql.elements import ColumnElement


@contextmanager
def unavailable_on_failure(operation: str) -> Iterator[None]:
    """Translate driver failures (timeouts, lost connections) to StoreUnavailableError."""
    try:
        yield
    except OperationalError as e:
        raise StoreUnavailableError(operation, str(e.orig)) from e


def _to_row(integration: Integration) -> dict[str, Any]:
    return {
        "id": integration.id,
        "organization_id": integration.organization_id,
        "environment_id": integration.environment_id,
        "identifier": integration.identifier,
        "name": integration.name,
        "channel": integration.channel.value,
        "provider_id": integration.provider_id,
        "credentials": dict(integration.credentials),
        "active": integration.active,
        "created_at": integration.created_at,
        "updated_at": integration.updated_at,
    }


def _from_row(row: Mapping[str, Any]) -> Integration:
    return Integration(
        id=row["id"],
        identifier=row["identifier"],
        organization_id=row["organization_id"],
        environment_id=row["environment_id"],
        channel=ChannelType(row["channel"]),
        provider_id=row["provider_id"],
        name=row["name"],
        credentials=row["credentials"] or {},
        active=bool(row["active"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _where(integration_filter: IntegrationFilter) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if integration_filter.organization_id is not None:
        clauses.append(
            integrations.c.organization_id == integration_filter.organization_id
        )
    if integration_filter.environment_id is not None:
        clauses.append(
            integrations.c.environment_id == integration_filter.environment_id
        )
    if integration_filter.channel is not None:
        clauses.append(integrations.c.channel == integration_filter.channel.value)
    if integration_filter.provider_id is not None:
        clauses.append(integrations.c.provider_id == integration_filter.provider_id)
    if integration_filter.identifier is not None:
        clauses.append(integrations.c.identifier == integration_filter.identifier)
    if integration_filter.active is not None:
        clauses.append(integrations.c.active == integration_filter.active)
    return clauses


class SqlAlchemyIntegrationStore(IntegrationStore):
    """IntegrationStore implementation that supports both Postgres and SQLite.

    Uniqueness of ``(environment_id, identifier)`` is enforced by the database;
    inserts use ON CONFLICT DO NOTHING and then read back to decide which
    conflict, if any, occurred.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    # --- lookups ---

    def get(self, integration_id: str) -> Integration | None:
        with unavailable_on_failure("get"):
            row = self.connection.execute(
                select(integrations).where(integrations.c.id == integration_id)
            ).fetchone()
        return None if row is None else _from_row(row._mapping)

    def find_many(self, integration_filter: IntegrationFilter) -> list[Integration]:
        stmt = (
            select(integrations)
            .where(*_where(integration_filter))
            .order_by(integrations.c.created_at, integrations.c.id)
        )
        with unavailable_on_failure("find_many"):
            rows = self.connection.execute(stmt).fetchall()
        return [_from_row(row._mapping) for row in rows]

    def _identifier_owner(self, environment_id: str, identifier: str) -> str | None:
        return self.connection.execute(
            select(integrations.c.id).where(
                integrations.c.environment_id == environment_id,
                integrations.c.identifier == identifier,
            )
        ).scalar_one_or_none()

    # --- create: no-throw insert + decide outcome via reads ---

    def create(self, integration: Integration) -> Integration:
        values = _to_row(integration)
        values["created_at"] = integration.created_at or datetime.now(timezone.utc)
        stmt = insert_ignoring_conflicts(integrations, self.dialect, **values)

        with unavailable_on_failure("create"):
            result = self.connection.execute(stmt)
            if result.rowcount == 1:  # pragma: no mutate
                return _from_row(values)

            if self.get(integration.id) is not None:
                raise IntegrationIdConflictError(integration.id)
            if self._identifier_owner(
                integration.environment_id, integration.identifier
            ):
                raise IdentifierConflictError(
                    integration.environment_id, integration.identifier
                )

        # Insert skipped but no conflicting row is visible; should never happen.
        msg = "create(): insert failed but no conflicting rows found"  # pragma: no cover
        raise RuntimeError(msg)  # pragma: no cover

    # --- update ---

    def update(self, integration: Integration) -> Integration:
        with unavailable_on_failure("update"):
            if (current := self.get(integration.id)) is None:
                raise IntegrationNotFoundError(integration.id)
            owner = self._identifier_owner(
                integration.environment_id, integration.identifier
            )
            if owner is not None and owner != integration.id:
                raise IdentifierConflictError(
                    integration.environment_id, integration.identifier
                )

            values = _to_row(integration)
            values["created_at"] = current.created_at
            values["updated_at"] = datetime.now(timezone.utc)
            del values["id"]
            try:
                self.connection.execute(
                    update(integrations)
                    .where(integrations.c.id == integration.id)
                    .values(**values)
                )
            except IntegrityError as e:
                # lost a race for the identifier to a concurrent writer
                raise IdentifierConflictError(
                    integration.environment_id, integration.identifier
                ) from e
        return _from_row({"id": integration.id, **values})

    # --- delete ---

    def delete_many(self, integration_filter: IntegrationFilter) -> int:
        if integration_filter.organization_id is None:
            raise UnscopedDeleteError
        with unavailable_on_failure("delete_many"):
            result = self.connection.execute(
                delete(integrations).where(*_where(integration_filter))
            )
        return int(result.rowcount)

