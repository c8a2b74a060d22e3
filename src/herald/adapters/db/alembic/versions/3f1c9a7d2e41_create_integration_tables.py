"""Create environments and integrations tables

Revision ID: 3f1c9a7d2e41
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from herald.adapters.db.sa_types import CREDENTIALS_JSON, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2e41"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "environments",
        sa.Column(
            "id", sa.String(length=64), nullable=False, comment="Environment id (ULID)."
        ),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_environments")),
        sa.UniqueConstraint(
            "organization_id", "name", name=op.f("uq_environments_organization_id_name")
        ),
        comment="Organization-scoped deployment contexts.",
    )

    op.create_table(
        "integrations",
        sa.Column(
            "id", sa.String(length=64), nullable=False, comment="Integration id (ULID)."
        ),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("environment_id", sa.String(length=64), nullable=False),
        sa.Column(
            "identifier",
            sa.String(length=255),
            nullable=False,
            comment="Human-readable key, unique within the environment.",
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("channel", sa.String(length=16), nullable=False),
        sa.Column("provider_id", sa.String(length=64), nullable=False),
        sa.Column(
            "credentials",
            CREDENTIALS_JSON,
            nullable=False,
            comment="Provider credential payload (JSON object).",
        ),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_integrations")),
        sa.UniqueConstraint(
            "environment_id",
            "identifier",
            name=op.f("uq_integrations_environment_id_identifier"),
        ),
        comment="Configured notification provider integrations.",
    )
    op.create_index(
        op.f("ix_integrations_scope"),
        "integrations",
        ["organization_id", "environment_id", "channel"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        op.f("ix_integrations_scope"),
        table_name="integrations",
    )
    op.drop_table("integrations")
    op.drop_table("environments")
