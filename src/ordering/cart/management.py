"""Cart management: adding, changing and removing cart lines.

Each change is checked against the book's current stock. Like
``CartValidator`` this check is advisory; stock is only taken at checkout.
"""

from decimal import Decimal

import structlog
from protean.exceptions import ValidationError

from ordering.cart.port import CartLine, CartStore
from ordering.catalogue.port import CatalogueStore
from ordering.exceptions import InsufficientStock
from ordering.utils.money import ZERO

logger = structlog.get_logger(__name__)


def _check_quantity(quantity):
    if quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})


class CartManager:
    def __init__(self, catalogue: CatalogueStore, carts: CartStore) -> None:
        self.catalogue = catalogue
        self.carts = carts

    def get_cart(self, user_id) -> list[CartLine]:
        return self.carts.get_cart_lines(user_id)

    def add_to_cart(self, user_id, book_id, quantity=1) -> CartLine:
        """Add a book to the cart, merging with an existing line for it."""
        _check_quantity(quantity)
        book = self.catalogue.get_book(book_id)

        existing = self.carts.get_line(user_id, book.id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if new_quantity > book.stock_quantity:
            raise InsufficientStock(book.id, new_quantity, book.stock_quantity)

        line = self.carts.set_line(user_id, book.id, new_quantity)
        logger.debug("Cart line saved", user_id=str(user_id), book_id=book.id, quantity=new_quantity)
        return line

    def update_quantity(self, user_id, book_id, quantity) -> CartLine:
        _check_quantity(quantity)
        if self.carts.get_line(user_id, book_id) is None:
            raise ValidationError({"book_id": [f"Book {book_id} is not in the cart"]})

        book = self.catalogue.get_book(book_id)
        if quantity > book.stock_quantity:
            raise InsufficientStock(book.id, quantity, book.stock_quantity)
        return self.carts.set_line(user_id, book.id, quantity)

    def remove_from_cart(self, user_id, book_id) -> bool:
        return self.carts.remove_line(user_id, book_id)

    def cart_total(self, user_id) -> Decimal:
        """Value of the cart at today's prices (not a quote)."""
        return sum(
            (self.catalogue.get_book(line.book_id).price * line.quantity for line in self.get_cart(user_id)),
            ZERO,
        )
