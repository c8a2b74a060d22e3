"""Environment directory adapters (in-memory and SQLAlchemy)."""

from .memory_directory import InMemoryEnvironmentDirectory
from .sqlalchemy_directory import SqlAlchemyEnvironmentDirectory

__all__ = [
    "InMemoryEnvironmentDirectory",
    "SqlAlchemyEnvironmentDirectory",
]
