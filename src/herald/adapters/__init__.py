"""Concrete implementations of the HERALD ports."""
