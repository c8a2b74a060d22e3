"""Integration store adapters (in-memory and SQLAlchemy)."""

from .memory_store import InMemoryIntegrationStore
from .sqlalchemy_store import SqlAlchemyIntegrationStore, unavailable_on_failure

__all__ = [
    "InMemoryIntegrationStore",
    "SqlAlchemyIntegrationStore",
    "unavailable_on_failure",
]
