"""HERALD Integration Store Interface Package"""

from .errors import (
    IdentifierConflictError,
    IntegrationIdConflictError,
    IntegrationNotFoundError,
    IntegrationStoreError,
    StoreUnavailableError,
    UnscopedDeleteError,
)
from .integration_store import IntegrationFilter, IntegrationStore

__all__ = [
    "IdentifierConflictError",
    "IntegrationFilter",
    "IntegrationIdConflictError",
    "IntegrationNotFoundError",
    "IntegrationStore",
    "IntegrationStoreError",
    "StoreUnavailableError",
    "UnscopedDeleteError",
]
