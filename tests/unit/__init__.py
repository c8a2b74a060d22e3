"""Unit tests: one module at a time, in-memory fakes at the ports."""
