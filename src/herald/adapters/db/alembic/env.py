"""Alembic environment for the integration tables.

The database URL comes from ``-x url=...``, else the config's sqlalchemy.url
(set by ``herald db``), else HERALD_DB_URL. Autogenerate compares column types
and server defaults; SQLite migrations run in batch mode.
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from herald.adapters.db.dialects import DialectName
from herald.adapters.db.schema import metadata
from herald.config import ALEMBIC_URL_KEY, DB_URL_ENV

# pylint: disable=no-member

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def get_url() -> str:
    """Return the first URL given by ``-x url``, the config, or the environment."""
    candidates = (
        context.get_x_argument(as_dictionary=True).get("url"),
        config.get_main_option(ALEMBIC_URL_KEY),
        os.environ.get(DB_URL_ENV),
    )
    for url in candidates:
        # an unexpanded "%(...)s" placeholder counts as unset
        if url and "%(" not in url:
            return url
    raise RuntimeError(f"Set {DB_URL_ENV} to your database URL.")


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    context.configure(
        url=get_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run the migrations on a fresh, unpooled connection."""
    connectable = engine_from_config(
        {ALEMBIC_URL_KEY: get_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=(
                DialectName.from_sqlalchemy(connection) is DialectName.SQLITE
            ),
            **COMPARE_OPTIONS,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
