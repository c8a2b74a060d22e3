"""Contract tests: the behavior every adapter of a port must share.

Fixtures parametrize the implementations (memory, SQLite, PostgreSQL) so a
new adapter only needs to be added to the fixture to be held to the contract.
"""
