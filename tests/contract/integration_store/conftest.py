"""Fixtures for IntegrationStore contract tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager

import pytest

from herald.adapters.integration_store import (
    InMemoryIntegrationStore,
    SqlAlchemyIntegrationStore,
)
from herald.interfaces.integration_store import IntegrationStore

# pylint: disable=redefined-outer-name

StoreCtxFactory = Callable[[], AbstractContextManager[IntegrationStore]]

ENGINE_FIXTURES = {
    "sql_memory": "sqlite_engine_memory",
    "sql_file": "sqlite_engine_file",
    "postgres": "postgres_engine",
}


def _store_ctx_factory(request: pytest.FixtureRequest) -> StoreCtxFactory:
    """Return a factory of short-lived store contexts for the requested backend.

    Every context of the in-memory backend shares one store; SQL contexts each
    open their own transaction that commits on exit.
    """
    if request.param == "memory":
        shared = InMemoryIntegrationStore()

        @contextmanager
        def _memory_ctx() -> Iterator[IntegrationStore]:
            yield shared

        return _memory_ctx

    if request.param not in ENGINE_FIXTURES:
        raise ValueError(f"unknown integration store backend: {request.param}")
    engine = request.getfixturevalue(ENGINE_FIXTURES[request.param])

    @contextmanager
    def _sql_ctx() -> Iterator[IntegrationStore]:
        with engine.begin() as conn:
            yield SqlAlchemyIntegrationStore(conn)

    return _sql_ctx


@pytest.fixture(params=["memory", "sql_memory", "sql_file", "postgres"])
def make_store_ctx(request: pytest.FixtureRequest) -> StoreCtxFactory:
    """Store context factory for every backend."""
    return _store_ctx_factory(request)


@pytest.fixture(params=["memory", "sql_file", "postgres"])
def make_shared_store_ctx(request: pytest.FixtureRequest) -> StoreCtxFactory:
    """Store context factory for backends that several threads can share.

    In-memory SQLite is excluded: each thread would see its own database.
    """
    return _store_ctx_factory(request)


@pytest.fixture
def store(make_store_ctx: StoreCtxFactory) -> Iterator[IntegrationStore]:
    """A single store context kept open for the whole test."""
    with make_store_ctx() as integration_store:
        yield integration_store
