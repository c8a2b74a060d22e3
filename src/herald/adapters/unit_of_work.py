"""Unit of Work adapters for HERALD.

- `SqlAlchemyUnitOfWork`: one connection, and so one transaction, per
  ``with`` block; the integration store and environment directory both run
  on it, so an integration and the environment check that allowed it commit
  or roll back together.
- `InMemoryUnitOfWork`: long-lived in-memory stores shared across blocks,
  for service-layer tests and demos.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from herald.adapters.environment_directory import (
    InMemoryEnvironmentDirectory,
    SqlAlchemyEnvironmentDirectory,
)
from herald.adapters.integration_store import (
    InMemoryIntegrationStore,
    SqlAlchemyIntegrationStore,
    unavailable_on_failure,
)
from herald.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over a SQLAlchemy engine."""

    connection: Connection

    def __init__(self, engine: Engine):
        self.engine = engine

    def __enter__(self):
        with unavailable_on_failure("connect"):
            self.connection = self.engine.connect()
        self.integrations = SqlAlchemyIntegrationStore(self.connection)
        self.environments = SqlAlchemyEnvironmentDirectory(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def commit(self):
        with unavailable_on_failure("commit"):
            self.connection.commit()

    def rollback(self):
        with unavailable_on_failure("rollback"):
            self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over in-memory stores.

    Writes land immediately and `rollback` cannot undo them; `committed`
    records whether any block committed, which is what tests assert on.
    """

    def __init__(
        self,
        integrations: InMemoryIntegrationStore | None = None,
        environments: InMemoryEnvironmentDirectory | None = None,
    ) -> None:
        self.integrations = integrations or InMemoryIntegrationStore()
        self.environments = environments or InMemoryEnvironmentDirectory()
        self.committed = False

    def commit(self):
        self.committed = True

    def rollback(self):
        pass
