"""Order aggregate (CQRS): the record of a checked-out cart.

An order is born at checkout with its lines and their prices fixed. After
that only its status moves. The order total is never stored: it is the
sum of the line totals, so it cannot drift from the lines.

State Machine: see ``ordering.order.status``.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.exceptions import InvalidStatusTransition
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.status import OrderStatus, can_transition
from ordering.utils.money import ZERO, to_money


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """One book on an order, with the unit price captured at checkout.

    Later catalogue price changes never reach an existing line.
    """

    book_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = String(required=True, max_length=20)  # serialized Decimal

    @property
    def price(self) -> Decimal:
        return to_money(self.unit_price)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    order_date = DateTime(required=True)
    shipping_address = String(required=True, max_length=500)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    lines = HasMany(OrderLine)
    updated_at = DateTime()
    cancelled_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, shipping_address, lines_data):
        """Create a Pending order.

        Args:
            user_id: The user checking out.
            shipping_address: Free-form delivery address.
            lines_data: List of dicts with book_id, quantity, unit_price.
        """
        if not lines_data:
            raise ValidationError({"lines": ["An order needs at least one line"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            order_date=now,
            shipping_address=shipping_address,
            status=OrderStatus.PENDING.value,
            lines=[
                OrderLine(
                    book_id=str(data["book_id"]),
                    quantity=data["quantity"],
                    unit_price=str(to_money(data["unit_price"])),
                )
                for data in lines_data
            ],
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                lines=json.dumps(order.line_snapshot(with_prices=True)),
                shipping_address=shipping_address,
                total_amount=str(order.total_amount),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total_amount(self) -> Decimal:
        return sum((line.line_total for line in self.lines), ZERO)

    def line_snapshot(self, with_prices=False):
        snapshot = []
        for line in self.lines:
            entry = {"book_id": str(line.book_id), "quantity": line.quantity}
            if with_prices:
                entry["unit_price"] = str(line.price)
            snapshot.append(entry)
        return snapshot

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if not can_transition(current, target_status):
            raise InvalidStatusTransition(current.value, target_status.value)
        return current

    def change_status(self, target_status):
        """Move along the fulfilment path (Processing, Shipped, Delivered)."""
        if target_status == OrderStatus.CANCELLED:
            return self.cancel()

        previous = self._assert_can_transition(target_status)
        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous.value,
                new_status=target_status.value,
                changed_at=now,
            )
        )

    def cancel(self):
        """Cancel the order. Stock is released by the caller, not here."""
        previous = self._assert_can_transition(OrderStatus.CANCELLED)
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous.value,
                new_status=OrderStatus.CANCELLED.value,
                changed_at=now,
            )
        )
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                previous_status=previous.value,
                lines=json.dumps(self.line_snapshot()),
                cancelled_at=now,
            )
        )
