"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the API's Pydantic request schemas.
Book ids refer to the starter catalogue (``ordering.catalogue.seed``).
"""

import random
import uuid

from faker import Faker

fake = Faker()

SEED_BOOK_IDS = [f"book-{n:03d}" for n in range(1, 11)]

# The one book every contention user fights over
CONTENDED_BOOK_ID = "book-003"


def unique_user_id() -> str:
    """Generate unique user ids like 'user-lt-a1b2c3d4'."""
    return f"user-lt-{uuid.uuid4().hex[:8]}"


def shipping_address() -> str:
    """Single-line address within the 500-char limit."""
    return fake.address().replace("\n", ", ")[:500]


def cart_item_data(book_id: str | None = None) -> dict:
    """Generate AddToCartRequest payload."""
    return {
        "book_id": book_id or random.choice(SEED_BOOK_IDS),
        "quantity": random.randint(1, 3),
    }


def basket(size: int | None = None) -> list[str]:
    """Distinct books for one cart."""
    return random.sample(SEED_BOOK_IDS, size or random.randint(1, 4))


def checkout_data(user_id: str) -> dict:
    """Generate CheckoutRequest payload."""
    return {"user_id": user_id, "shipping_address": shipping_address()}
