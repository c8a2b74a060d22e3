"""HERALD

A configuration service for notification provider integrations.
It creates, validates and scopes per-channel provider configurations
(email, SMS, push, chat, in-app) for an organization and environment.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
