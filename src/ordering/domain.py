"""Ordering bounded context: Checkout, Orders and Stock Consistency.

Converts shopping carts into orders, keeps book stock consistent through
atomic reservations, and reverses stock when orders are cancelled.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
