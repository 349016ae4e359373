"""Cart store factory.

Provides get_cart_store() / set_cart_store() to swap implementations:
- InMemoryCartStore for development and testing (default)
- SqlCartStore when ``STORE_DATABASE_URI`` is set
"""

import os

from ordering.cart.memory_adapter import InMemoryCartStore
from ordering.cart.port import CartLine, CartStore

_current_store: CartStore | None = None


def get_cart_store() -> CartStore:
    """Return the active cart store, building it on first use."""
    global _current_store
    if _current_store is None:
        database_uri = os.getenv("STORE_DATABASE_URI")
        if database_uri:
            from ordering.cart.sql_adapter import SqlCartStore
            from ordering.utils.db import make_engine, setup_db

            engine = make_engine(database_uri)
            setup_db(engine)
            _current_store = SqlCartStore(engine)
        else:
            _current_store = InMemoryCartStore()
    return _current_store


def set_cart_store(store: CartStore) -> None:
    """Override the active cart store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_cart_store() -> None:
    global _current_store
    _current_store = None


__all__ = ["CartLine", "CartStore", "get_cart_store", "set_cart_store", "reset_cart_store"]
