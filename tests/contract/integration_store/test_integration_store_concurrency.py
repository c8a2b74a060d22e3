"""Concurrency contracts for IntegrationStore.

These assert the adapters rely on storage-level uniqueness (or a lock, for the
in-memory store) to arbitrate races on ``(environment_id, identifier)``.
"""

from __future__ import annotations

import threading
from typing import Literal

from herald.interfaces.integration_store import (
    IdentifierConflictError,
    IntegrationFilter,
)
from tests.fixtures.datagen import DEV_ENV_ID, ORG_ID

N_WORKERS = 8


def _race(make_shared_store_ctx, integrations):
    """Create each integration from its own thread, all released at once."""
    barrier = threading.Barrier(N_WORKERS)
    results: list[tuple[Literal["ok", "err"], str | Exception]] = []
    lock = threading.Lock()  # protect results append

    def worker(integration):
        with make_shared_store_ctx() as store:
            try:  # pylint: disable=too-many-try-statements
                barrier.wait(timeout=5)
                store.create(integration)
                with lock:
                    results.append(("ok", integration.id))
            except IdentifierConflictError as e:
                with lock:
                    results.append(("err", e))
            except threading.BrokenBarrierError as e:
                with lock:
                    results.append(("err", e))

    threads = [threading.Thread(target=worker, args=(i,)) for i in integrations]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    return results


def test_concurrent_create_same_identifier_has_one_winner(
    make_shared_store_ctx, make_integration
):
    """Exactly one creation wins; the rest observe IdentifierConflictError."""
    contenders = [
        make_integration(identifier="primary-mail") for _ in range(N_WORKERS)
    ]

    results = _race(make_shared_store_ctx, contenders)

    oks = [r for tag, r in results if tag == "ok"]
    errs = [r for tag, r in results if tag == "err"]
    assert len(oks) == 1, f"expected exactly one winner, got {oks}"
    assert len(errs) == N_WORKERS - 1, f"expected seven conflicts, got {errs}"
    assert all(isinstance(e, IdentifierConflictError) for e in errs)

    # check with a fresh store (new connection)
    with make_shared_store_ctx() as store:
        stored = store.find_many(
            IntegrationFilter(environment_id=DEV_ENV_ID, identifier="primary-mail")
        )
    assert [i.id for i in stored] == oks


def test_concurrent_create_distinct_identifiers_all_succeed(
    make_shared_store_ctx, make_integration
):
    """Creations that do not collide are all stored."""
    contenders = [
        make_integration(identifier=f"mail-{n}") for n in range(N_WORKERS)
    ]

    results = _race(make_shared_store_ctx, contenders)

    oks = [r for tag, r in results if tag == "ok"]
    assert len(oks) == N_WORKERS, f"unexpected errors: {results}"

    with make_shared_store_ctx() as store:
        stored = store.find_many(IntegrationFilter(organization_id=ORG_ID))
    assert sorted(i.id for i in stored) == sorted(oks)
