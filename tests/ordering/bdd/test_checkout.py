"""BDD tests for checkout."""

from decimal import Decimal

from pytest_bdd import parsers, scenarios, then, when

scenarios("features/checkout.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the user checks out", target_fixture="order")
def _(service, user_id, attempt):
    return attempt(service.checkout, user_id, "1 Elm St")


@when("the other user checks out", target_fixture="other_order")
def _(service, other_user_id, attempt):
    return attempt(service.checkout, other_user_id, "1 Elm St")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("an order is placed with total {total}"))
def _(service, order, total):
    assert order is not None
    assert service.get_by_id(order.id).total_amount == Decimal(total)


@then("no order is placed")
def _(service, user_id, order):
    assert order is None
    assert service.list_for_user(user_id) == []


@then("the cart is empty")
def _(carts, user_id):
    assert carts.get_cart_lines(user_id) == []


@then(parsers.cfparse("the cart holds {count:d} lines"))
def _(carts, user_id, count):
    assert len(carts.get_cart_lines(user_id)) == count


@then("the other user's checkout fails with a validation error")
def _(other_order, error):
    assert other_order is None
    assert error["exc"] is not None
