"""Fake implementations for testing service layer handlers."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from herald.adapters.environment_directory import InMemoryEnvironmentDirectory
from herald.adapters.id_generators import SimpleIdGenerator
from herald.adapters.unit_of_work import InMemoryUnitOfWork
from herald.bootstrap import build_message_bus
from herald.interfaces.id_generator import IdGenerator
from herald.interfaces.provider_probe import ProviderCheckFailedError, ProviderProbe
from herald.service_layer.handlers import COMMAND_HANDLERS, QUERY_HANDLERS

if TYPE_CHECKING:
    from herald.config import Settings
    from herald.domain.environment import Environment
    from herald.domain.integration import Credentials
    from herald.domain.providers import ProviderDescriptor
    from herald.service_layer.messagebus import MessageBus

# pylint: disable=too-few-public-methods


class RecordingProbe(ProviderProbe):
    """Probe that records every verification and optionally fails them."""

    def __init__(self, fail_with: str | None = None) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.fail_with = fail_with

    def verify(self, descriptor: ProviderDescriptor, credentials: Credentials) -> None:
        self.calls.append((descriptor.provider_id, dict(credentials)))
        if self.fail_with is not None:
            raise ProviderCheckFailedError(descriptor.provider_id, self.fail_with)


class FixedSuffixIdGenerator(IdGenerator):
    """Unique ids that all end with the same suffix, to force identifier clashes."""

    def __init__(self, suffix: str = "zzzzzz") -> None:
        self._counter = itertools.count(1)
        self._suffix = suffix

    def new_id(self) -> str:
        return f"{next(self._counter):020d}{self._suffix}"


def bootstrap_test_bus(
    environments: list[Environment] | None = None,
    settings: Settings | None = None,
    probe: ProviderProbe | None = None,
    id_generator: IdGenerator | None = None,
) -> MessageBus:
    """Bootstrap a message bus over in-memory stores for testing purposes."""
    uow = InMemoryUnitOfWork(
        environments=InMemoryEnvironmentDirectory(environments or [])
    )
    return build_message_bus(
        uow,
        COMMAND_HANDLERS,
        QUERY_HANDLERS,
        settings=settings,
        probe=probe or RecordingProbe(),
        id_generator=id_generator or SimpleIdGenerator(),
    )
