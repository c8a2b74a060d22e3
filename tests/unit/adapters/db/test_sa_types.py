"""Unit tests for the UTCDateTime column type."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from herald.adapters.db.sa_types import UTCDateTime

UTC = timezone.utc
PLUS_TWO = timezone(timedelta(hours=2))


@pytest.fixture(name="utc_type")
def fixture_utc_type() -> UTCDateTime:
    """A fresh UTCDateTime instance."""
    return UTCDateTime()


def test_sqlite_binds_naive_utc(utc_type):
    """SQLite stores naive UTC so values are not reinterpreted as local time."""
    value = datetime(2025, 3, 1, 14, 0, tzinfo=PLUS_TWO)

    bound = utc_type.process_bind_param(value, sqlite.dialect())

    assert bound == datetime(2025, 3, 1, 12, 0)
    assert bound.tzinfo is None


def test_postgres_binds_aware_utc(utc_type):
    """Postgres keeps the value aware, converted to UTC."""
    value = datetime(2025, 3, 1, 14, 0, tzinfo=PLUS_TWO)

    bound = utc_type.process_bind_param(value, postgresql.dialect())

    assert bound == datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    assert bound.utcoffset() == timedelta(0)


def test_naive_values_are_treated_as_utc(utc_type):
    """A naive datetime is assumed to already be UTC."""
    naive = datetime(2025, 3, 1, 12, 0)
    bound = utc_type.process_bind_param(naive, postgresql.dialect())

    assert bound == datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "stored",
    [datetime(2025, 3, 1, 12, 0), datetime(2025, 3, 1, 14, 0, tzinfo=PLUS_TWO)],
)
def test_results_are_aware_utc(utc_type, stored):
    """Values come back tz-aware in UTC whatever the driver returns."""
    result = utc_type.process_result_value(stored, sqlite.dialect())

    assert result == datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    assert result.tzinfo is UTC


def test_none_passes_through(utc_type):
    """NULL stays NULL both ways."""
    assert utc_type.process_bind_param(None, sqlite.dialect()) is None
    assert utc_type.process_result_value(None, sqlite.dialect()) is None
