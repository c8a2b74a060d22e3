"""HERALD test suite.

- unit/: handlers over in-memory stores, domain rules, CLI helpers. No I/O.
- contract/: one set of tests run against every IntegrationStore,
  EnvironmentDirectory and IdGenerator implementation.
- integration/: SQLite files and PostgreSQL containers, Alembic migrations,
  bootstrap wiring.
- functional/: the ``herald`` command, driven through click's CliRunner.
- fixtures/: shared fixtures and test data builders (no tests).

Each folder's tests get the marker of the same name. PostgreSQL-backed tests
are skipped when no Docker daemon is available.
"""
