"""Unit of Work interface for HERALD.

Handlers do all their reads and writes inside one ``with uow:`` block::

    with uow:
        env = uow.environments.get(environment_id)
        uow.integrations.create(integration)
        uow.commit()

Leaving the block rolls back whatever was not committed, so a handler that
raises halfway (a missing credential, an identifier conflict) leaves the
store untouched.
"""

from __future__ import annotations

import abc

from .environment_directory import EnvironmentDirectory
from .integration_store import IntegrationStore


class AbstractUnitOfWork(abc.ABC):
    """One transaction spanning the integration store and environment directory."""

    integrations: IntegrationStore
    environments: EnvironmentDirectory

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Make the block's writes durable and visible to other units."""

    @abc.abstractmethod
    def rollback(self):
        """Discard the block's uncommitted writes."""
