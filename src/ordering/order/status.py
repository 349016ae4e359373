"""Order status state machine.

State Machine (5 states):
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING | PROCESSING → CANCELLED

DELIVERED and CANCELLED are terminal. Every permitted move is listed in
``_VALID_TRANSITIONS``; anything missing from the table is refused.
"""

from enum import Enum

import structlog

from ordering.exceptions import InvalidStatusTransition

logger = structlog.get_logger(__name__)


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

TERMINAL_STATES = frozenset(status for status, targets in _VALID_TRANSITIONS.items() if not targets)


def parse_status(value, current=None) -> OrderStatus:
    """Resolve a status name or value; unknown names are an invalid transition."""
    if isinstance(value, OrderStatus):
        return value
    for status in OrderStatus:
        if str(value).lower() in (status.value.lower(), status.name.lower()):
            return status
    raise InvalidStatusTransition(
        current.value if isinstance(current, OrderStatus) else current,
        value,
        reason=f"Unknown order status: {value}",
    )


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return requested in _VALID_TRANSITIONS[current]


class OrderStatusMachine:
    """Validates and applies status changes to orders.

    Applying ``Cancelled`` also hands every order line back to the
    inventory ledger, once the move has been validated.
    """

    def __init__(self, ledger) -> None:
        self.ledger = ledger

    def validate_transition(self, current, requested) -> OrderStatus:
        current_status = parse_status(current)
        requested_status = parse_status(requested, current=current_status)

        if not can_transition(current_status, requested_status):
            if current_status == OrderStatus.DELIVERED and requested_status == OrderStatus.CANCELLED:
                reason = "Cannot cancel an order that has already been delivered"
            else:
                reason = None
            raise InvalidStatusTransition(current_status.value, requested_status.value, reason=reason)
        return requested_status

    def apply(self, order, requested, persist=None) -> bool:
        """Move ``order`` to ``requested``.

        ``persist``, when given, is called with the updated order before
        any stock is released, so stock only goes back once the
        cancellation is stored. Returns False when the order is already
        cancelled and cancellation is requested again: nothing changes and
        no stock is released.
        """
        current = OrderStatus(order.status)
        requested_status = parse_status(requested, current=current)

        if current == OrderStatus.CANCELLED and requested_status == OrderStatus.CANCELLED:
            logger.info("Order already cancelled", order_id=str(order.id))
            return False

        self.validate_transition(current, requested_status)

        if requested_status == OrderStatus.CANCELLED:
            order.cancel()
        else:
            order.change_status(requested_status)

        if persist is not None:
            persist(order)

        if requested_status == OrderStatus.CANCELLED:
            self.ledger.release_all(order.lines)
        return True

    def cancel(self, order, persist=None) -> bool:
        return self.apply(order, OrderStatus.CANCELLED, persist=persist)
