"""Integration tests against real databases and the real bootstrap."""
