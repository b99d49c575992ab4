"""Catalog adapter factory.

Provides get_catalog() / set_catalog() so cart and order handlers read shops
and products through the ``CatalogReader`` port instead of a global store.
The adapter is chosen with the CATALOG_ADAPTER environment variable.
"""

import os

from ordering.catalog.port import CatalogReader

_current_catalog: CatalogReader | None = None


def get_catalog() -> CatalogReader:
    """Return the configured catalog adapter. Defaults to InMemoryCatalog."""
    global _current_catalog
    if _current_catalog is None:
        adapter = os.environ.get("CATALOG_ADAPTER", "memory")
        if adapter == "memory":
            from ordering.catalog.memory_adapter import InMemoryCatalog

            _current_catalog = InMemoryCatalog()
        else:
            raise ValueError(f"Unknown catalog adapter: {adapter}")
    return _current_catalog


def set_catalog(catalog: CatalogReader) -> None:
    """Override the active catalog adapter (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to the default adapter."""
    global _current_catalog
    _current_catalog = None
