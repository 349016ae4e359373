"""OrderService: checkout, status changes and cancellation.

Checkout flow:
    1. Load the user's cart (CartEmpty if there is nothing in it)
    2. Advisory stock check (CartValidator)
    3. Reserve every line, all or nothing (InventoryLedger.reserve_all)
    4. Assemble and persist the Order; on failure release the reservation
    5. Remove the ordered lines from the cart, only once the order is
       stored; lines added or changed meanwhile stay for the next checkout

Cancellation flow:
    1. Validate the move to Cancelled (OrderStatusMachine)
    2. Persist the cancelled order
    3. Release every line back to stock

Checkout is serialised per user and status changes per order. Requests
for different users and different orders run in parallel.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart import CartStore, get_cart_store
from ordering.cart.validation import CartValidator
from ordering.catalogue import CatalogueStore, get_catalogue
from ordering.exceptions import CartEmpty, OrderNotFound
from ordering.inventory.ledger import InventoryLedger
from ordering.order.assembler import OrderAssembler
from ordering.order.order import Order
from ordering.order.status import OrderStatus, OrderStatusMachine, parse_status
from ordering.utils.locks import KeyedLock
from ordering.utils.logging import bind_context

logger = structlog.get_logger(__name__)


class OrderService:
    def __init__(self, catalogue: CatalogueStore, carts: CartStore) -> None:
        self.catalogue = catalogue
        self.carts = carts
        self.validator = CartValidator(catalogue, carts)
        self.ledger = InventoryLedger(catalogue)
        self.assembler = OrderAssembler(catalogue)
        self.status_machine = OrderStatusMachine(self.ledger)
        self._checkout_locks = KeyedLock()
        self._order_locks = KeyedLock()

    @property
    def orders(self):
        return current_domain.repository_for(Order)

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def checkout(self, user_id, shipping_address) -> Order:
        user_id = str(user_id)
        with bind_context(user_id=user_id), self._checkout_locks.hold(user_id):
            cart_lines = self.carts.get_cart_lines(user_id)
            if not cart_lines:
                raise CartEmpty(user_id)

            self.validator.ensure_valid(user_id)
            reserved = self.ledger.reserve_all(cart_lines)

            try:
                order = self.assembler.assemble(user_id, cart_lines, shipping_address)
                self.orders.add(order)
            except Exception:
                logger.exception("Order could not be stored, releasing reserved stock")
                self.ledger.release_all(reserved)
                raise

            try:
                self.carts.remove_lines(cart_lines)
            except Exception:
                # The stored order owns the reserved stock from here on
                logger.exception("Cart could not be cleared after checkout", order_id=str(order.id))

            logger.info(
                "Order placed",
                order_id=str(order.id),
                line_count=len(cart_lines),
                total_amount=str(order.total_amount),
            )
            return order

    # -------------------------------------------------------------------
    # Status changes
    # -------------------------------------------------------------------
    def update_status(self, order_id, new_status) -> Order:
        order, _ = self._transition(order_id, new_status)
        return order

    def cancel(self, order_id) -> bool:
        """Cancel an order and return its stock.

        Returns False when the order was already cancelled; nothing is
        released a second time.
        """
        _, changed = self._transition(order_id, OrderStatus.CANCELLED)
        return changed

    def _transition(self, order_id, requested):
        order_id = str(order_id)
        with bind_context(order_id=order_id), self._order_locks.hold(order_id):
            order = self.get_by_id(order_id)
            requested_status = parse_status(requested, current=order.status)

            previous = order.status
            changed = self.status_machine.apply(order, requested_status, persist=self.orders.add)
            if changed:
                logger.info("Order status changed", previous_status=previous, new_status=order.status)
            return order, changed

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_by_id(self, order_id) -> Order:
        try:
            return self.orders.get(str(order_id))
        except ObjectNotFoundError as exc:
            raise OrderNotFound(order_id) from exc

    def list_for_user(self, user_id) -> list[Order]:
        return self.orders.find_by_user(user_id)

    def list_by_status(self, status) -> list[Order]:
        return self.orders.find_by_status(parse_status(status).value)

    def list_all(self) -> list[Order]:
        return self.orders.find_all()


# ---------------------------------------------------------------------------
# Service factory
# ---------------------------------------------------------------------------
_current_service: OrderService | None = None


def get_order_service() -> OrderService:
    """Return the service bound to the active catalogue and cart stores.

    The instance is reused while the stores stay the same, so its
    per-user and per-order locks cover every request.
    """
    global _current_service
    catalogue, carts = get_catalogue(), get_cart_store()
    if _current_service is None or _current_service.catalogue is not catalogue or _current_service.carts is not carts:
        _current_service = OrderService(catalogue, carts)
    return _current_service


def reset_order_service() -> None:
    global _current_service
    _current_service = None
