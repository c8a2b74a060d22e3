"""Service layer for HERALD.

Implements application use-cases: command/query handlers, orchestration, and
transaction boundaries. Calls domain objects and the ports defined in
`herald.interfaces`.

Dependency rule: may import `herald.domain`, `herald.interfaces` and
`herald.config`, but not `herald.adapters` or `herald.entrypoints`.
"""
