"""Provider catalog adapters."""

from .static_catalog import PROVIDERS, StaticProviderCatalog

__all__ = ["PROVIDERS", "StaticProviderCatalog"]
