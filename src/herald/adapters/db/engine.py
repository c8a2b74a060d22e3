"""Engine factory for the integration database.

Every engine HERALD opens goes through `make_engine` so that store calls share
one timeout budget (``HERALD_DB_TIMEOUT``):

- SQLite: the budget is the driver's busy timeout, i.e. how long a writer waits
  for another writer's lock; connections also switch to WAL.
- PostgreSQL: the budget is the connect timeout (whole seconds, at least one)
  and the server-side ``statement_timeout`` and ``lock_timeout``, so a writer
  queued behind another transaction's row lock gives up too.

A call that runs out of budget fails with an OperationalError, which the
stores and the unit of work report as ``StoreUnavailableError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

from herald.config import DEFAULT_DB_TIMEOUT_S

from .dialects import DialectName, UnsupportedDialect

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SQLITE_PRAGMAS = (
    "PRAGMA foreign_keys=ON",
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA temp_store=MEMORY",
)


def _dialect_of(url: str | URL) -> DialectName | None:
    try:
        return DialectName.from_string(make_url(str(url)).get_backend_name())
    except UnsupportedDialect:
        return None


def _connect_args(dialect: DialectName | None, timeout: float) -> dict[str, Any]:
    if dialect is DialectName.SQLITE:
        return {"timeout": timeout}
    if dialect is DialectName.POSTGRES:
        timeout_ms = max(1, int(timeout * 1000))
        return {
            "connect_timeout": max(1, int(timeout)),
            "options": (
                f"-c statement_timeout={timeout_ms} -c lock_timeout={timeout_ms}"
            ),
        }
    return {}


def _apply_sqlite_pragmas(dbapi_conn, _conn_record) -> None:
    cur = dbapi_conn.cursor()
    for pragma in SQLITE_PRAGMAS:
        cur.execute(pragma)
    cur.close()


def make_engine(
    url: str | URL, *, echo: bool = False, timeout: float = DEFAULT_DB_TIMEOUT_S
) -> Engine:
    """Create an Engine for `url` with the backend's timeout and tuning applied.

    Args:
        url: Database URL.
        echo: Log every SQL statement.
        timeout: Seconds a store call may wait for a connection, a lock or a
            statement.

    Returns:
        Engine: The configured engine.
    """
    dialect = _dialect_of(url)
    engine = create_engine(
        url, echo=echo, connect_args=_connect_args(dialect, timeout)
    )
    if dialect is DialectName.SQLITE:
        event.listen(engine, "connect", _apply_sqlite_pragmas)
    return engine
