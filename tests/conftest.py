"""Global pytest fixtures for HERALD."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
    "tests.fixtures.datagen",
]


# Helper to route to an existing engine fixture by name
@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """Indirection fixture to parametrize over engine-providing fixtures.

    Example:
        ```py
        @pytest.mark.parametrize(
            "engine", ["postgres_engine", "sqlite_engine_file"], indirect=True
        )
        def test_something(engine): ...
        ```
    """
    return request.getfixturevalue(request.param)


TESTS_ROOT = Path(__file__).parent.resolve()
#: Top-level test folders whose items get a default marker of the same name.
DEFAULT_MARKERS = ("unit", "contract", "integration", "functional")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Mark every item with the name of its top-level folder (unit, contract, ...)."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        try:
            folder = path.relative_to(TESTS_ROOT).parts[0]
        except (ValueError, IndexError):
            continue
        if folder not in DEFAULT_MARKERS:
            continue
        if not any(marker.name == folder for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, folder))
