"""Ports (abstract interfaces) implemented by HERALD adapters."""
