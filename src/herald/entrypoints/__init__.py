"""Entrypoints (inbound adapters) for HERALD.

Expose the application to the outside world: today the ``herald`` CLI. Parse
and validate inputs, send commands/queries through the message bus, and
present results.

Dependency rule: may import `herald.bootstrap` and `herald.service_layer`;
avoid importing `herald.adapters` directly.
"""
