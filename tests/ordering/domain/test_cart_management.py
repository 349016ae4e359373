"""Tests for CartManager: adding, merging, updating and removing cart lines."""

from decimal import Decimal

import pytest
from ordering.cart.management import CartManager
from ordering.cart.memory_adapter import InMemoryCartStore
from ordering.catalogue import Book
from ordering.catalogue.memory_adapter import InMemoryCatalogue
from ordering.exceptions import BookNotFound, InsufficientStock
from protean.exceptions import ValidationError


@pytest.fixture()
def catalogue():
    return InMemoryCatalogue(
        [
            Book(id="book-a", title="Refactoring", price=Decimal("10.00"), stock_quantity=5),
            Book(id="book-b", title="Clean Code", price=Decimal("5.00"), stock_quantity=2),
        ]
    )


@pytest.fixture()
def manager(catalogue):
    return CartManager(catalogue, InMemoryCartStore())


class TestAddToCart:
    def test_adds_a_line(self, manager):
        line = manager.add_to_cart("user-001", "book-a", 2)

        assert line.quantity == 2
        assert manager.get_cart("user-001") == [line]

    def test_defaults_to_one_copy(self, manager):
        assert manager.add_to_cart("user-001", "book-a").quantity == 1

    def test_merges_with_existing_line(self, manager):
        manager.add_to_cart("user-001", "book-a", 2)
        manager.add_to_cart("user-001", "book-a", 3)

        lines = manager.get_cart("user-001")
        assert len(lines) == 1
        assert lines[0].quantity == 5

    def test_merged_quantity_is_checked_against_stock(self, manager):
        manager.add_to_cart("user-001", "book-b", 2)

        with pytest.raises(InsufficientStock) as exc:
            manager.add_to_cart("user-001", "book-b", 1)

        assert exc.value.requested == 3
        assert manager.get_cart("user-001")[0].quantity == 2

    def test_unknown_book(self, manager):
        with pytest.raises(BookNotFound):
            manager.add_to_cart("user-001", "missing")

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_quantity_must_be_positive(self, manager, quantity):
        with pytest.raises(ValidationError) as exc:
            manager.add_to_cart("user-001", "book-a", quantity)
        assert "quantity" in exc.value.messages

    def test_does_not_reserve_stock(self, manager, catalogue):
        manager.add_to_cart("user-001", "book-a", 5)
        assert catalogue.get_book("book-a").stock_quantity == 5


class TestUpdateAndRemove:
    def test_update_replaces_quantity(self, manager):
        manager.add_to_cart("user-001", "book-a", 4)
        assert manager.update_quantity("user-001", "book-a", 1).quantity == 1

    def test_update_above_stock_is_refused(self, manager):
        manager.add_to_cart("user-001", "book-b", 1)
        with pytest.raises(InsufficientStock):
            manager.update_quantity("user-001", "book-b", 3)

    def test_update_of_a_book_not_in_cart(self, manager):
        with pytest.raises(ValidationError) as exc:
            manager.update_quantity("user-001", "book-a", 1)
        assert "book_id" in exc.value.messages

    def test_remove(self, manager):
        manager.add_to_cart("user-001", "book-a", 1)

        assert manager.remove_from_cart("user-001", "book-a") is True
        assert manager.remove_from_cart("user-001", "book-a") is False
        assert manager.get_cart("user-001") == []


class TestCartTotal:
    def test_total_at_current_prices(self, manager, catalogue):
        manager.add_to_cart("user-001", "book-a", 3)
        manager.add_to_cart("user-001", "book-b", 1)
        assert manager.cart_total("user-001") == Decimal("35.00")

        catalogue.set_price("book-a", Decimal("12.00"))
        assert manager.cart_total("user-001") == Decimal("41.00")

    def test_empty_cart_totals_zero(self, manager):
        assert manager.cart_total("user-001") == Decimal("0.00")

    def test_carts_are_per_user(self, manager):
        manager.add_to_cart("user-001", "book-a", 1)
        assert manager.get_cart("user-002") == []
