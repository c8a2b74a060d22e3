"""Implementation of EnvironmentDirectory using SQLAlchemy Core."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from herald.adapters.db.dialects import DialectName, insert_ignoring_conflicts
from herald.adapters.db.schema import environments
from herald.domain.environment import Environment
from herald.interfaces.environment_directory import (
    EnvironmentAlreadyExistsError,
    EnvironmentDirectory,
)
from herald.interfaces.integration_store import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Connection
    from sqlalchemy.sql import Select


def _from_row(row: Mapping[str, Any]) -> Environment:
    return Environment(
        id=row["id"],
        organization_id=row["organization_id"],
        name=row["name"],
        created_at=row["created_at"],
    )


class SqlAlchemyEnvironmentDirectory(EnvironmentDirectory):
    """EnvironmentDirectory backed by the ``environments`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    def _fetch(self, operation: str, stmt: Select) -> list[Environment]:
        try:
            rows = self.connection.execute(stmt).fetchall()
        except OperationalError as e:
            raise StoreUnavailableError(operation, str(e.orig)) from e
        return [_from_row(row._mapping) for row in rows]

    def get(self, environment_id: str) -> Environment | None:
        found = self._fetch(
            "get_environment",
            select(environments).where(environments.c.id == environment_id),
        )
        return found[0] if found else None

    def find_by_name(self, organization_id: str, name: str) -> Environment | None:
        found = self._fetch(
            "find_environment",
            select(environments).where(
                environments.c.organization_id == organization_id,
                environments.c.name == name,
            ),
        )
        return found[0] if found else None

    def list(self, organization_id: str) -> list[Environment]:
        return self._fetch(
            "list_environments",
            select(environments)
            .where(environments.c.organization_id == organization_id)
            .order_by(environments.c.created_at, environments.c.id),
        )

    def add(self, environment: Environment) -> Environment:
        values = {
            "id": environment.id,
            "organization_id": environment.organization_id,
            "name": environment.name,
            "created_at": environment.created_at or datetime.now(timezone.utc),
        }
        stmt = insert_ignoring_conflicts(environments, self.dialect, **values)
        try:
            result = self.connection.execute(stmt)
        except OperationalError as e:
            raise StoreUnavailableError("add_environment", str(e.orig)) from e
        if result.rowcount != 1:  # pragma: no mutate
            raise EnvironmentAlreadyExistsError(
                environment.organization_id, environment.name
            )
        return _from_row(values)
