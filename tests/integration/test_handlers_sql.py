"""Service-layer flows against a migrated SQLite database.

Runs the production wiring (``bootstrap``) over a temp-file database so that
handlers, the SQLAlchemy unit of work and the schema are exercised together.
"""

from __future__ import annotations

import pytest
from sqlalchemy import text

from herald.adapters.db.engine import make_engine
from herald.adapters.unit_of_work import SqlAlchemyUnitOfWork
from herald.bootstrap import bootstrap, build_message_bus
from herald.config import ActiveProviderPolicy, Settings
from herald.domain.errors import ActiveProviderConflictError, FieldTooLongError
from herald.domain.limits import MAX_TEXT_LENGTH
from herald.interfaces.integration_store import (
    IdentifierConflictError,
    StoreUnavailableError,
)
from herald.service_layer.commands import (
    CallerContext,
    CreateEnvironment,
    CreateIntegration,
    DeleteIntegrations,
    UpdateIntegration,
)
from herald.service_layer.handlers import COMMAND_HANDLERS, QUERY_HANDLERS
from herald.service_layer.queries import ListEnvironments, ListIntegrations

# pylint: disable=redefined-outer-name,magic-value-comparison

ORG = "org-acme"
SENDGRID = {"apiKey": "SG.key", "secretKey": "s3cr3t"}


@pytest.fixture
def bus(sqlite_url):
    """Message bus wired to a fresh, migrated SQLite file."""
    return bootstrap(db_url=sqlite_url, settings=Settings()).message_bus


@pytest.fixture
def caller(bus) -> CallerContext:
    """A caller whose current environment exists (and is seeded)."""
    environment = bus.handle(CreateEnvironment(organization_id=ORG, name="Development"))
    return CallerContext(organization_id=ORG, environment_id=environment.id)


def create_email(bus, caller, provider_id="sendgrid", **kwargs):
    """Create an email integration with complete SendGrid-style credentials."""
    kwargs.setdefault("credentials", SENDGRID)
    return bus.handle(
        CreateIntegration(
            context=caller, channel="email", provider_id=provider_id, **kwargs
        )
    )


def test_environment_creation_is_persisted_with_built_ins(bus, caller):
    """The environment and its built-in integrations survive the transaction."""
    assert [e.name for e in bus.handle(ListEnvironments(organization_id=ORG))] == [
        "Development"
    ]
    listed = bus.handle(ListIntegrations(context=caller))
    assert {(i.provider_id, i.active) for i in listed} == {
        ("herald-email", True),
        ("herald-sms", True),
    }


def test_create_update_delete_roundtrip(bus, caller):
    """An integration goes through its whole lifecycle against the database."""
    created = create_email(bus, caller, identifier="transactional")
    assert created.created_at is not None

    updated = bus.handle(
        UpdateIntegration(
            context=caller,
            integration_id=created.id,
            name="Transactional mail",
            active=True,
        )
    )
    assert updated.active is True
    assert updated.updated_at is not None
    assert updated.credentials == SENDGRID

    deleted = bus.handle(
        DeleteIntegrations(
            context=caller, environment_id=caller.environment_id, provider_id="sendgrid"
        )
    )
    assert deleted == 1
    remaining = bus.handle(ListIntegrations(context=caller, channel="email"))
    assert [i.provider_id for i in remaining] == ["herald-email"]


def test_activation_deactivates_previous_provider_atomically(bus, caller):
    """The previous provider is deactivated in the same transaction."""
    first = create_email(bus, caller, active=True)
    second = create_email(
        bus, caller, provider_id="postmark", credentials={"apiKey": "pm"}, active=True
    )

    active = {
        i.id
        for i in bus.handle(ListIntegrations(context=caller, channel="email"))
        if i.active and not i.provider_id.startswith("herald")
    }
    assert active == {second.id}
    assert first.id not in active


def test_rejected_activation_writes_nothing(sqlite_url, caller):
    """Under the reject policy a refused create leaves the database unchanged."""
    reject_bus = bootstrap(
        db_url=sqlite_url,
        settings=Settings(active_provider_policy=ActiveProviderPolicy.REJECT),
    ).message_bus
    create_email(reject_bus, caller, active=True)

    with pytest.raises(ActiveProviderConflictError):
        create_email(
            reject_bus,
            caller,
            provider_id="postmark",
            credentials={"apiKey": "pm"},
            active=True,
        )

    listed = reject_bus.handle(ListIntegrations(context=caller, channel="email"))
    assert [i.provider_id for i in listed] == ["herald-email", "sendgrid"]


def test_identifier_conflict_is_enforced_by_the_database(bus, caller):
    """Explicit identifiers stay unique per environment."""
    create_email(bus, caller, identifier="mail")

    with pytest.raises(IdentifierConflictError):
        create_email(bus, caller, identifier="mail")


def test_missing_schema_reports_store_unavailable(tmp_path):
    """A database without the schema surfaces as StoreUnavailableError."""
    engine = make_engine(f"sqlite+pysqlite:///{tmp_path / 'empty.db'}")
    bus = build_message_bus(
        SqlAlchemyUnitOfWork(engine), COMMAND_HANDLERS, QUERY_HANDLERS
    )
    caller = CallerContext(organization_id=ORG, environment_id="env-1")

    with pytest.raises(StoreUnavailableError, match="unavailable during"):
        bus.handle(ListIntegrations(context=caller))
    engine.dispose()


def test_write_lock_timeout_reports_store_unavailable(sqlite_url, caller):
    """A writer that cannot get the SQLite lock in time fails as retryable."""
    engine = make_engine(sqlite_url, timeout=0.2)
    bus = build_message_bus(
        SqlAlchemyUnitOfWork(engine), COMMAND_HANDLERS, QUERY_HANDLERS
    )
    blocker = make_engine(sqlite_url).connect()
    try:
        # an uncommitted write holds the database lock
        blocker.execute(
            text("UPDATE integrations SET name = name WHERE organization_id = :o"),
            {"o": ORG},
        )
        with pytest.raises(StoreUnavailableError) as exc_info:
            create_email(bus, caller, identifier="blocked")
        assert exc_info.value.retryable is True
    finally:
        blocker.rollback()
        blocker.close()
        engine.dispose()


def test_same_provider_twice_is_stored_twice(bus, caller):
    """Two SendGrid integrations in one environment get their own rows."""
    first = create_email(bus, caller, active=True)
    second = create_email(bus, caller, active=True)

    rows = bus.handle(
        ListIntegrations(context=caller, environment_id=caller.environment_id)
    )
    sendgrid = {i.id: i for i in rows if i.provider_id == "sendgrid"}
    assert set(sendgrid) == {first.id, second.id}
    assert first.identifier != second.identifier
    assert sendgrid[first.id].active is False
    assert sendgrid[second.id].active is True


def test_same_provider_twice_with_multi_provider_enabled(sqlite_url, caller):
    """With the gate enabled both copies stay active."""
    bus = bootstrap(
        db_url=sqlite_url, settings=Settings(multi_provider_enabled=True)
    ).message_bus
    first = create_email(bus, caller, active=True)
    second = create_email(bus, caller, active=True)

    active = bus.handle(ListIntegrations(context=caller, active=True))
    assert {first.id, second.id} <= {i.id for i in active}


def test_overlong_identifier_is_rejected_before_the_database(bus, caller):
    """Identifiers longer than the column are a caller error, not a driver error."""
    with pytest.raises(FieldTooLongError):
        create_email(bus, caller, identifier="x" * (MAX_TEXT_LENGTH + 1))

    listed = bus.handle(ListIntegrations(context=caller))
    assert [i.provider_id for i in listed] == ["herald-email", "herald-sms"]
