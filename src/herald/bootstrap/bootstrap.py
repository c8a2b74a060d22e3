"""Bootstrap the message bus with handlers, adapters and settings."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

from herald import config
from herald.adapters.catalog import StaticProviderCatalog
from herald.adapters.db.engine import make_engine
from herald.adapters.id_generators import ULIDGenerator
from herald.adapters.provider_probe import NullProviderProbe
from herald.adapters.redactor import Redactor
from herald.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from herald.interfaces.redactor import RedactorMode
from herald.service_layer.handlers import (
    COMMAND_HANDLERS,
    QUERY_HANDLERS,
    list_providers,
)
from herald.service_layer.messagebus import MessageBus
from herald.service_layer.queries import ListProviders

if TYPE_CHECKING:
    from herald.interfaces.id_generator import IdGenerator
    from herald.interfaces.provider_catalog import ProviderCatalog
    from herald.interfaces.provider_probe import ProviderProbe
    from herald.interfaces.unit_of_work import AbstractUnitOfWork
    from herald.service_layer.commands import Command
    from herald.service_layer.queries import Query


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus
    settings: config.Settings
    catalog: ProviderCatalog
    redactor: Redactor


def build_write_uow(
    url: str, timeout: float = config.DEFAULT_DB_TIMEOUT_S
) -> AbstractUnitOfWork:
    """Build a new unit of work for write operations."""
    engine = make_engine(url, timeout=timeout)
    return SqlAlchemyUnitOfWork(engine)


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: dict[type[Command], Callable[..., Any]],
    query_handlers: dict[type[Query], Callable[..., Any]] | None = None,
    *,
    catalog: ProviderCatalog | None = None,
    settings: config.Settings | None = None,
    id_generator: IdGenerator | None = None,
    probe: ProviderProbe | None = None,
) -> MessageBus:
    """Build a message bus with injected dependencies.

    Each handler receives only the dependencies named in its signature. Omitted
    dependencies fall back to the production defaults.
    """
    dependencies = {
        "uow": uow,
        "catalog": catalog or StaticProviderCatalog(),
        "settings": settings or config.Settings(),
        "id_generator": id_generator or ULIDGenerator(),
        "probe": probe or NullProviderProbe(),
    }
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }
    injected_query_handlers = {
        query_type: inject_dependencies(handler, dependencies)
        for query_type, handler in (query_handlers or {}).items()
    }

    return MessageBus(
        uow,
        command_handlers=injected_command_handlers,
        query_handlers=injected_query_handlers,
    )


def bootstrap(
    db_url: str | None = None,
    settings: config.Settings | None = None,
    redactor_mode: RedactorMode = RedactorMode.LENIENT,
) -> AppContainer:
    """Bootstrap the message bus with handlers, adapters and settings.

    Args:
        db_url: Database URL; defaults to `HERALD_DB_URL`.
        settings: Runtime settings; defaults to `config.load_settings()`.
        redactor_mode: How aggressively credentials are masked for display.

    Raises:
        DatabaseUrlNotSetError: If no URL is given and `HERALD_DB_URL` is unset.
        InvalidSettingError: If a HERALD_* variable cannot be parsed.
    """
    settings = settings or config.load_settings()
    uow = build_write_uow(db_url or config.get_db_url(), timeout=settings.db_timeout_s)
    catalog = StaticProviderCatalog()
    message_bus = build_message_bus(
        uow,
        COMMAND_HANDLERS,
        QUERY_HANDLERS,
        catalog=catalog,
        settings=settings,
    )

    return AppContainer(
        message_bus=message_bus,
        settings=settings,
        catalog=catalog,
        redactor=Redactor(redactor_mode),
    )


def bootstrap_catalog() -> MessageBus:
    """Build a message bus that only answers catalog queries (no database needed)."""
    return build_message_bus(
        InMemoryUnitOfWork(), {}, {ListProviders: list_providers}
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return partial(handler, **deps)
