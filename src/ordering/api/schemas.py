"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
Order aggregate and the store records.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Checkout & Orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    user_id: str = Field(min_length=1)
    shipping_address: str = Field(min_length=1, max_length=500)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-001",
                    "shipping_address": "123 Main St, Springfield, IL 62701",
                }
            ]
        }
    }


class UpdateStatusRequest(BaseModel):
    # Free text on purpose: unknown names are refused by the state machine
    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "Processing"}]}}


class OrderLineSchema(BaseModel):
    book_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class OrderSummary(BaseModel):
    order_id: str
    user_id: str
    order_date: datetime
    shipping_address: str
    status: str
    total_amount: Decimal
    lines: list[OrderLineSchema]

    @classmethod
    def from_order(cls, order) -> "OrderSummary":
        return cls(
            order_id=str(order.id),
            user_id=str(order.user_id),
            order_date=order.order_date,
            shipping_address=order.shipping_address,
            status=order.status,
            total_amount=order.total_amount,
            lines=[
                OrderLineSchema(
                    book_id=str(line.book_id),
                    quantity=line.quantity,
                    unit_price=line.price,
                    line_total=line.line_total,
                )
                for line in order.lines
            ],
        )


class CancelResponse(BaseModel):
    order_id: str
    cancelled: bool


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    book_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=1)


class CartLineSchema(BaseModel):
    book_id: str
    quantity: int


class CartResponse(BaseModel):
    user_id: str
    lines: list[CartLineSchema]
    total_amount: Decimal


class StatusResponse(BaseModel):
    status: str = "ok"
