"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper from cart to order."""

    user_id: str
    book_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    current_status: str = "Pending"
