"""HERALD command-line interface."""
