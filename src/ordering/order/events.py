"""Domain events for the Order aggregate.

Events are immutable facts raised by the aggregate and dispatched when the
order is persisted. Money travels as decimal strings.
"""

from protean.fields import DateTime, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order; stock is already reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: [{book_id, quantity, unit_price}]
    shipping_address = String(required=True, max_length=500)
    total_amount = String(required=True)  # serialized Decimal
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The order moved along its lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled; its lines' stock goes back to the catalogue."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    lines = Text(required=True)  # JSON: [{book_id, quantity}]
    cancelled_at = DateTime(required=True)
