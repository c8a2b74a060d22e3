"""Bootstrap (composition root) for HERALD.

Assembles the application at runtime: wires concrete adapters to service-layer
handlers, composes shared services (message bus, unit of work), reads
configuration, and exposes small factories for entrypoints.

Import rules:
- Entry points import *this* package (not adapters/service_layer internals).
- This package may import: `herald.adapters`, `herald.service_layer`,
  `herald.interfaces`, `herald.domain`, and `herald.config`.
- Inner layers must not import `herald.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    bootstrap_catalog,
    build_message_bus,
    build_write_uow,
    inject_dependencies,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "bootstrap_catalog",
    "build_message_bus",
    "build_write_uow",
    "inject_dependencies",
]
