"""SQLite fixtures: an in-memory schema for quick store tests, a migrated file
for anything that needs several connections (threads, the CLI, Alembic)."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from alembic import command
from sqlalchemy.engine import URL

from herald import config
from herald.adapters.db.engine import make_engine
from herald.adapters.db.schema import metadata

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine_memory() -> Iterator[Engine]:
    """In-memory engine with the tables created from `metadata` (no Alembic)."""
    url = "sqlite+pysqlite:///:memory:"
    test_engine = make_engine(url)
    metadata.create_all(test_engine)
    yield test_engine
    metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of a temp-file SQLite database migrated to Alembic head."""
    url = str(URL.create("sqlite+pysqlite", database=str(tmp_path / "herald.db")))
    command.upgrade(config.build_alembic_config(url), "head")
    return url


@pytest.fixture
def sqlite_engine_file(sqlite_url: str) -> Iterator[Engine]:
    """Engine on the `sqlite_url` file; concurrent store contracts share it."""
    test_engine = make_engine(sqlite_url)
    try:
        yield test_engine
    finally:
        test_engine.dispose()
