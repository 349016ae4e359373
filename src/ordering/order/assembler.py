"""OrderAssembler: builds a Pending order from cart lines.

Prices are read from the catalogue at assembly time and frozen into the
order lines; the cart never carries a price.
"""

import structlog

from ordering.catalogue.port import CatalogueStore
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


class OrderAssembler:
    def __init__(self, catalogue: CatalogueStore) -> None:
        self.catalogue = catalogue

    def assemble(self, user_id, cart_lines, shipping_address) -> Order:
        lines_data = []
        for line in cart_lines:
            book = self.catalogue.get_book(line.book_id)
            lines_data.append(
                {
                    "book_id": book.id,
                    "quantity": line.quantity,
                    "unit_price": book.price,
                }
            )

        order = Order.place(
            user_id=user_id,
            shipping_address=shipping_address,
            lines_data=lines_data,
        )
        logger.debug(
            "Order assembled",
            order_id=str(order.id),
            line_count=len(lines_data),
            total_amount=str(order.total_amount),
        )
        return order
