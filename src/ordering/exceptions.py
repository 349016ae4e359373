"""Business errors raised by the ordering core.

Validation-class errors (bad cart, not enough stock, illegal status change)
extend Protean's ``ValidationError`` so their messages are keyed by field.
Missing records extend ``ObjectNotFoundError``.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class CartEmpty(ValidationError):
    def __init__(self, user_id):
        self.user_id = str(user_id)
        super().__init__({"cart": [f"Cart for user {self.user_id} is empty"]})


class InsufficientStock(ValidationError):
    """Not enough stock to cover the requested quantity of a book."""

    def __init__(self, book_id, requested, available=None):
        self.book_id = str(book_id)
        self.requested = requested
        self.available = available
        message = f"Insufficient stock for book {self.book_id}: {requested} requested"
        if available is not None:
            message += f", {available} available"
        super().__init__({"quantity": [message]})


class InvalidStatusTransition(ValidationError):
    def __init__(self, current, requested, reason=None):
        self.current = current
        self.requested = requested
        message = reason or f"Cannot transition from {current} to {requested}"
        super().__init__({"status": [message]})


class BookNotFound(ObjectNotFoundError):
    def __init__(self, book_id):
        self.book_id = str(book_id)
        super().__init__({"book_id": [f"Book {self.book_id} does not exist"]})


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id):
        self.order_id = str(order_id)
        super().__init__({"order_id": [f"Order {self.order_id} does not exist"]})
