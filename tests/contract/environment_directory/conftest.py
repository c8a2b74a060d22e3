"""Fixtures for EnvironmentDirectory contract tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from herald.adapters.environment_directory import (
    InMemoryEnvironmentDirectory,
    SqlAlchemyEnvironmentDirectory,
)
from herald.interfaces.environment_directory import EnvironmentDirectory


@pytest.fixture(params=["memory", "sql_memory", "sql_file", "postgres"])
def directory(request: pytest.FixtureRequest) -> Iterator[EnvironmentDirectory]:
    """Yield a fresh EnvironmentDirectory for the requested backend.

    SQL backends run the whole test inside one transaction that commits on exit.
    """
    match request.param:
        case "memory":
            yield InMemoryEnvironmentDirectory()
            return
        case "sql_memory":
            engine = request.getfixturevalue("sqlite_engine_memory")
        case "sql_file":
            engine = request.getfixturevalue("sqlite_engine_file")
        case "postgres":
            engine = request.getfixturevalue("postgres_engine")
        case _:
            raise ValueError(f"unknown environment directory type: {request.param}")

    with engine.begin() as conn:
        yield SqlAlchemyEnvironmentDirectory(conn)
