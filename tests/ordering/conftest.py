from decimal import Decimal

import pytest
from ordering.cart import get_cart_store, reset_cart_store
from ordering.catalogue import Book, get_catalogue, reset_catalogue
from ordering.order.service import get_order_service, reset_order_service
from ordering.utils.db import drop_db


@pytest.fixture(scope="session")
def _ordering_domain(request):
    """Initialize the ordering domain once per session."""
    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(autouse=True)
def run_around_tests(_ordering_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


def _reset_stores():
    reset_catalogue()
    reset_cart_store()
    reset_order_service()


# ---------------------------------------------------------------------------
# Stores and service
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """The active catalogue store; SQL-backed when STORE_DATABASE_URI is set."""
    _reset_stores()
    store = get_catalogue()

    yield store

    engine = getattr(store, "engine", None)
    if engine is not None:
        drop_db(engine)
        engine.dispose()
    _reset_stores()


@pytest.fixture()
def carts(catalogue):
    return get_cart_store()


@pytest.fixture()
def service(catalogue, carts):
    return get_order_service()


# ---------------------------------------------------------------------------
# Books
# ---------------------------------------------------------------------------
@pytest.fixture()
def book_a(catalogue):
    return catalogue.add_book(Book(id="book-a", title="Refactoring", price=Decimal("10.00"), stock_quantity=10))


@pytest.fixture()
def book_b(catalogue):
    return catalogue.add_book(Book(id="book-b", title="Clean Code", price=Decimal("5.00"), stock_quantity=10))


@pytest.fixture()
def user_id():
    return "user-001"


@pytest.fixture()
def stock_of(catalogue):
    """Current stock level of a book, read fresh from the store."""

    def _stock_of(book_id):
        return catalogue.get_book(book_id).stock_quantity

    return _stock_of
