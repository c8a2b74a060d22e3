"""Database plumbing shared by the SQLAlchemy adapters (engine, types, schema)."""
