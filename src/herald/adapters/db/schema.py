"""Integration configuration schema.

Two tables:

- ``environments``: organization-scoped deployment contexts.
- ``integrations``: one row per configured provider in an environment, with its
  credential payload stored as JSON.

Constraints (enforced here):

| Constraint                               | Purpose                                |
|------------------------------------------|----------------------------------------|
| UNIQUE(environments.organization_id, name) | one "Production" per organization     |
| UNIQUE(integrations.environment_id, identifier) | identifier uniqueness per environment |

``integrations.environment_id`` has no foreign key; environment ownership is
checked by the service layer before any integration is written.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

from herald.domain.limits import MAX_TEXT_LENGTH

from .sa_types import CREDENTIALS_JSON, UTCDateTime

__all__ = ["environments", "integrations", "metadata"]

# Deterministic constraint names keep Alembic autogenerate diffs quiet.
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_label)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)

environments = Table(
    "environments",
    metadata,
    Column("id", String(64), primary_key=True, comment="Environment id (ULID)."),
    Column("organization_id", String(64), nullable=False),
    Column("name", String(MAX_TEXT_LENGTH), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint("organization_id", "name"),
    comment="Organization-scoped deployment contexts.",
)

integrations = Table(
    "integrations",
    metadata,
    Column("id", String(64), primary_key=True, comment="Integration id (ULID)."),
    Column("organization_id", String(64), nullable=False),
    Column("environment_id", String(64), nullable=False),
    Column(
        "identifier",
        String(MAX_TEXT_LENGTH),
        nullable=False,
        comment="Human-readable key, unique within the environment.",
    ),
    Column("name", String(MAX_TEXT_LENGTH), nullable=False),
    Column("channel", String(16), nullable=False),
    Column("provider_id", String(64), nullable=False),
    Column(
        "credentials",
        CREDENTIALS_JSON,
        nullable=False,
        comment="Provider credential payload (JSON object).",
    ),
    Column("active", Boolean, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    UniqueConstraint("environment_id", "identifier"),
    Index("ix_integrations_scope", "organization_id", "environment_id", "channel"),
    comment="Configured notification provider integrations.",
)
