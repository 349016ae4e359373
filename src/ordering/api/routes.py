"""FastAPI routes for the Ordering domain: checkout, orders and carts."""

from fastapi import APIRouter

from ordering.api.schemas import (
    AddToCartRequest,
    CancelResponse,
    CartLineSchema,
    CartResponse,
    CheckoutRequest,
    OrderSummary,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateStatusRequest,
)
from ordering.cart.management import CartManager
from ordering.order.service import get_order_service


def _cart_manager() -> CartManager:
    service = get_order_service()
    return CartManager(service.catalogue, service.carts)


def _cart_response(user_id: str) -> CartResponse:
    manager = _cart_manager()
    return CartResponse(
        user_id=user_id,
        lines=[CartLineSchema(book_id=line.book_id, quantity=line.quantity) for line in manager.get_cart(user_id)],
        total_amount=manager.cart_total(user_id),
    )


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderSummary)
async def checkout(body: CheckoutRequest) -> OrderSummary:
    order = get_order_service().checkout(body.user_id, body.shipping_address)
    return OrderSummary.from_order(order)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderSummary])
async def list_orders(user_id: str | None = None, status: str | None = None) -> list[OrderSummary]:
    service = get_order_service()
    if user_id is not None:
        orders = service.list_for_user(user_id)
        if status is not None:
            orders = [order for order in orders if order.status.lower() == status.lower()]
    elif status is not None:
        orders = service.list_by_status(status)
    else:
        orders = service.list_all()
    return [OrderSummary.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderSummary)
async def get_order(order_id: str) -> OrderSummary:
    return OrderSummary.from_order(get_order_service().get_by_id(order_id))


@order_router.patch("/{order_id}/status", response_model=OrderSummary)
async def update_order_status(order_id: str, body: UpdateStatusRequest) -> OrderSummary:
    order = get_order_service().update_status(order_id, body.status)
    return OrderSummary.from_order(order)


@order_router.delete("/{order_id}", response_model=CancelResponse)
async def cancel_order(order_id: str) -> CancelResponse:
    cancelled = get_order_service().cancel(order_id)
    return CancelResponse(order_id=order_id, cancelled=cancelled)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str) -> CartResponse:
    return _cart_response(user_id)


@cart_router.post("/{user_id}/items", response_model=CartResponse)
async def add_cart_item(user_id: str, body: AddToCartRequest) -> CartResponse:
    _cart_manager().add_to_cart(user_id, body.book_id, body.quantity)
    return _cart_response(user_id)


@cart_router.put("/{user_id}/items/{book_id}", response_model=CartResponse)
async def update_cart_item(user_id: str, book_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    _cart_manager().update_quantity(user_id, book_id, body.quantity)
    return _cart_response(user_id)


@cart_router.delete("/{user_id}/items/{book_id}", response_model=StatusResponse)
async def remove_cart_item(user_id: str, book_id: str) -> StatusResponse:
    removed = _cart_manager().remove_from_cart(user_id, book_id)
    return StatusResponse(status="ok" if removed else "not_in_cart")
