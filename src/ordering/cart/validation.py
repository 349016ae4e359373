"""Advisory stock check of a user's cart.

The result is a snapshot: stock can change the moment after it is read,
so checkout still goes through ``InventoryLedger.reserve_all``.
"""

import structlog

from ordering.cart.port import CartStore
from ordering.catalogue.port import CatalogueStore
from ordering.exceptions import InsufficientStock

logger = structlog.get_logger(__name__)


class CartValidator:
    def __init__(self, catalogue: CatalogueStore, carts: CartStore) -> None:
        self.catalogue = catalogue
        self.carts = carts

    def validate(self, user_id) -> list[InsufficientStock]:
        """Return one violation per cart line whose quantity exceeds stock.

        An empty list means every line is currently covered. Raises
        ``BookNotFound`` if a line points at a book that no longer exists.
        """
        violations = []
        for line in self.carts.get_cart_lines(user_id):
            book = self.catalogue.get_book(line.book_id)
            if line.quantity > book.stock_quantity:
                violations.append(InsufficientStock(book.id, line.quantity, book.stock_quantity))

        if violations:
            logger.info(
                "Cart exceeds available stock",
                user_id=str(user_id),
                book_ids=[v.book_id for v in violations],
            )
        return violations

    def ensure_valid(self, user_id) -> None:
        """Raise the first violation, if any."""
        violations = self.validate(user_id)
        if violations:
            raise violations[0]
