"""The database backends HERALD runs on, and the SQL that differs between them."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.sql.dml import Insert

_POSTGRES_ALIASES = frozenset({"postgres", "postgresql", "pg"})


class UnsupportedDialect(Exception):
    """The database is neither SQLite nor PostgreSQL."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialect names."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Map a dialect or driver name (``postgresql+psycopg``, ``pg``...) to a member.

        Raises:
            UnsupportedDialect: for any other backend.
        """
        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in _POSTGRES_ALIASES:
            return cls.POSTGRES
        if base == cls.SQLITE.value:
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Return the dialect an Engine or Connection talks to."""
        dialect = getattr(obj, "dialect", None)
        if dialect is None:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            )
        return cls.from_string(dialect.name)


def insert_ignoring_conflicts(table: Table, dialect: DialectName, **values) -> Insert:
    """Build an INSERT ... ON CONFLICT DO NOTHING for `table`.

    Any unique violation (primary key or identifier) makes the insert a no-op;
    callers look at ``rowcount`` and re-read to tell which one it was. This is
    what lets concurrent creations race safely without a prior SELECT.
    """
    if dialect is DialectName.POSTGRES:
        return pg_insert(table).values(**values).on_conflict_do_nothing()
    if dialect is DialectName.SQLITE:
        return sqlite_insert(table).values(**values).on_conflict_do_nothing()
    raise UnsupportedDialect(f"Unsupported dialect: {dialect!r}")  # pragma: no cover
