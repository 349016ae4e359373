"""Shared BDD fixtures and step definitions for the Ordering domain."""

from decimal import Decimal

import pytest
from ordering.catalogue import Book
from ordering.order.status import OrderStatus
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Fulfilment path walked by "the order has reached"
_PATH = [OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED]


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def other_user_id():
    return "user-002"


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def attempt(error):
    """Run an action, keeping a ValidationError in ``error`` instead of raising it."""

    def _attempt(action, *args):
        try:
            return action(*args)
        except ValidationError as exc:
            error["exc"] = exc
            return None

    return _attempt


# ---------------------------------------------------------------------------
# Given steps: Catalogue and Cart
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue has "{book_id}" priced at {price} with {stock:d} in stock'))
def _(catalogue, book_id, price, stock):
    catalogue.add_book(Book(id=book_id, title=book_id.title(), price=Decimal(price), stock_quantity=stock))


@given(parsers.cfparse('the cart holds {quantity:d} of "{book_id}"'))
def _(carts, user_id, quantity, book_id):
    carts.set_line(user_id, book_id, quantity)


@given(parsers.cfparse('another user\'s cart holds {quantity:d} of "{book_id}"'))
def _(carts, other_user_id, quantity, book_id):
    carts.set_line(other_user_id, book_id, quantity)


# ---------------------------------------------------------------------------
# Given steps: Order
# ---------------------------------------------------------------------------
@given("the user has checked out", target_fixture="order")
def _(service, user_id):
    return service.checkout(user_id, "1 Elm St")


@given(parsers.cfparse('the order has reached "{status}"'))
def _(service, order, status):
    target = OrderStatus(status)
    for step in _PATH:
        if OrderStatus(service.get_by_id(order.id).status) == target:
            break
        service.update_status(order.id, step)


@given("the order was cancelled")
def _(service, order):
    service.cancel(order.id)


# ---------------------------------------------------------------------------
# Then steps (shared, plain assertions)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(service, order, status):
    assert service.get_by_id(order.id).status == status


@then(parsers.cfparse('the stock of "{book_id}" is {stock:d}'))
def _(stock_of, book_id, stock):
    assert stock_of(book_id) == stock


@then("the action fails with a validation error")
def _(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
