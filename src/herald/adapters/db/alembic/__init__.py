"""Alembic migration scripts for the HERALD database."""
