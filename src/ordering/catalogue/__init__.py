"""Catalogue store factory.

Provides get_catalogue() / set_catalogue() to swap implementations:
- InMemoryCatalogue for development and testing (default)
- SqlCatalogue when ``STORE_DATABASE_URI`` is set
"""

import os

from ordering.catalogue.memory_adapter import InMemoryCatalogue
from ordering.catalogue.port import Book, CatalogueStore

_current_catalogue: CatalogueStore | None = None


def get_catalogue() -> CatalogueStore:
    """Return the active catalogue store, building it on first use."""
    global _current_catalogue
    if _current_catalogue is None:
        database_uri = os.getenv("STORE_DATABASE_URI")
        if database_uri:
            from ordering.catalogue.sql_adapter import SqlCatalogue
            from ordering.utils.db import make_engine, setup_db

            engine = make_engine(database_uri)
            setup_db(engine)
            _current_catalogue = SqlCatalogue(engine)
        else:
            _current_catalogue = InMemoryCatalogue()
    return _current_catalogue


def set_catalogue(catalogue: CatalogueStore) -> None:
    """Override the active catalogue store (useful for tests)."""
    global _current_catalogue
    _current_catalogue = catalogue


def reset_catalogue() -> None:
    global _current_catalogue
    _current_catalogue = None


__all__ = ["Book", "CatalogueStore", "get_catalogue", "set_catalogue", "reset_catalogue"]
