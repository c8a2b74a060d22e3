"""Functional tests: run ``herald`` commands and check what a user would see.

Assertions stick to exit codes, stdout (``--json``) and stderr messages.
"""
