import json
from decimal import Decimal

import pytest
from ordering.exceptions import InvalidStatusTransition
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.order import Order, OrderLine
from ordering.order.status import OrderStatus
from protean.exceptions import ValidationError


def _place(lines_data=None):
    if lines_data is None:
        lines_data = [
            {"book_id": "book-a", "quantity": 3, "unit_price": Decimal("10.00")},
            {"book_id": "book-b", "quantity": 1, "unit_price": Decimal("5.00")},
        ]
    return Order.place(user_id="user-001", shipping_address="1 Elm St, Springfield", lines_data=lines_data)


class TestOrderLine:
    def test_line_total_is_price_times_quantity(self):
        line = OrderLine(book_id="book-a", quantity=3, unit_price="10.00")
        assert line.price == Decimal("10.00")
        assert line.line_total == Decimal("30.00")

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderLine(book_id="book-a", quantity=0, unit_price="10.00")


class TestPlaceOrder:
    def test_new_order_is_pending(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value
        assert order.user_id == "user-001"
        assert order.order_date is not None
        assert len(order.lines) == 2

    def test_total_is_the_sum_of_line_totals(self):
        order = _place()
        assert order.total_amount == Decimal("35.00")
        assert order.total_amount == sum(line.line_total for line in order.lines)

    def test_unit_prices_are_normalised_to_cents(self):
        order = _place([{"book_id": "book-a", "quantity": 1, "unit_price": 10.1}])
        assert order.lines[0].unit_price == "10.10"

    def test_order_needs_at_least_one_line(self):
        with pytest.raises(ValidationError) as exc:
            _place([])
        assert "lines" in exc.value.messages

    def test_raises_order_placed(self):
        order = _place()

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.total_amount == "35.00"
        assert json.loads(event.lines) == [
            {"book_id": "book-a", "quantity": 3, "unit_price": "10.00"},
            {"book_id": "book-b", "quantity": 1, "unit_price": "5.00"},
        ]


class TestStatusChanges:
    def test_follows_the_fulfilment_path(self):
        order = _place()
        for status in (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            order.change_status(status)
            assert order.status == status.value

    def test_raises_status_changed(self):
        order = _place()
        order.change_status(OrderStatus.PROCESSING)

        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "Pending"
        assert event.new_status == "Processing"

    def test_cannot_skip_ahead(self):
        order = _place()
        with pytest.raises(InvalidStatusTransition):
            order.change_status(OrderStatus.DELIVERED)
        assert order.status == "Pending"

    def test_change_status_to_cancelled_cancels(self):
        order = _place()
        order.change_status(OrderStatus.CANCELLED)
        assert order.status == "Cancelled"
        assert order.cancelled_at is not None


class TestCancel:
    def test_cancel_raises_status_changed_and_cancelled(self):
        order = _place()
        order.cancel()

        changed, cancelled = order._events[-2:]
        assert isinstance(changed, OrderStatusChanged)
        assert changed.new_status == "Cancelled"
        assert isinstance(cancelled, OrderCancelled)
        assert cancelled.previous_status == "Pending"
        assert json.loads(cancelled.lines) == [
            {"book_id": "book-a", "quantity": 3},
            {"book_id": "book-b", "quantity": 1},
        ]

    def test_cannot_cancel_delivered_order(self):
        order = _place()
        order.change_status(OrderStatus.PROCESSING)
        order.change_status(OrderStatus.SHIPPED)
        order.change_status(OrderStatus.DELIVERED)

        with pytest.raises(InvalidStatusTransition):
            order.cancel()
        assert order.status == "Delivered"

    def test_total_survives_cancellation(self):
        order = _place()
        order.cancel()
        assert order.total_amount == Decimal("35.00")
