"""In-memory EnvironmentDirectory implementation."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone

from herald.domain.environment import Environment
from herald.interfaces.environment_directory import (
    EnvironmentAlreadyExistsError,
    EnvironmentDirectory,
)


class InMemoryEnvironmentDirectory(EnvironmentDirectory):
    """Dict-backed EnvironmentDirectory for tests and single-process use."""

    def __init__(self, environments: list[Environment] | None = None) -> None:
        self._environments: dict[str, Environment] = {}
        self._lock = threading.Lock()
        for environment in environments or []:
            self.add(environment)

    def get(self, environment_id: str) -> Environment | None:
        return self._environments.get(environment_id)

    def find_by_name(self, organization_id: str, name: str) -> Environment | None:
        for environment in self._environments.values():
            if (
                environment.organization_id == organization_id
                and environment.name == name
            ):
                return environment
        return None

    def list(self, organization_id: str) -> list[Environment]:
        return [
            env
            for env in self._environments.values()
            if env.is_owned_by(organization_id)
        ]

    def add(self, environment: Environment) -> Environment:
        with self._lock:
            if environment.id in self._environments or self.find_by_name(
                environment.organization_id, environment.name
            ):
                raise EnvironmentAlreadyExistsError(
                    environment.organization_id, environment.name
                )
            stored = replace(
                environment,
                created_at=environment.created_at or datetime.now(timezone.utc),
            )
            self._environments[stored.id] = stored
            return stored
