"""Fixtures for black-box CLI tests.

Provides a CliRunner, an isolated filesystem, a migrated SQLite database wired
through ``HERALD_DB_URL``, and a small ``invoke`` helper that parses ``--json``
output.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner, Result

from herald.entrypoints.cli.main import herald

# pylint: disable=redefined-outer-name

ORG = "org-acme"


@pytest.fixture
def runner() -> CliRunner:
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def cli_env(sqlite_url: str, tmp_path) -> dict[str, str]:
    """Environment pointing the CLI at a migrated SQLite file."""
    return {
        "HERALD_DB_URL": sqlite_url,
        "HERALD_ORGANIZATION_ID": ORG,
        "HERALD_LOG_PATH": str(tmp_path / "herald.log"),
        "HERALD_MULTI_PROVIDER_CONFIGURATION_ENABLED": "false",
        "HERALD_ACTIVE_PROVIDER_POLICY": "deactivate-previous",
    }


@pytest.fixture
def invoke(runner: CliRunner, cli_env: dict[str, str]) -> Callable[..., Result]:
    """Invoke ``herald`` with `cli_env`; extra keyword env vars are merged in."""

    def _invoke(args: list[str], stdin: str | None = None, **env: str) -> Result:
        return runner.invoke(herald, args, input=stdin, env={**cli_env, **env})

    return _invoke


@pytest.fixture
def invoke_json(invoke) -> Callable[..., Any]:
    """Invoke a command with ``--json``, assert success and return the parsed stdout."""

    def _invoke_json(args: list[str], **env: str) -> Any:
        result = invoke([*args, "--json"], **env)
        assert result.exit_code == 0, result.output
        return json.loads(result.stdout)

    return _invoke_json


@pytest.fixture
def environment_id(invoke_json) -> str:
    """Id of a freshly created 'Development' environment of ORG."""
    return invoke_json(["environments", "create", "Development"])["id"]
