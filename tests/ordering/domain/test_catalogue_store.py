"""Tests for the in-memory catalogue store, including concurrent reservations."""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from ordering.catalogue import Book
from ordering.catalogue.memory_adapter import InMemoryCatalogue
from ordering.catalogue.seed import SEED_BOOKS, seed_catalogue
from ordering.exceptions import BookNotFound, InsufficientStock


@pytest.fixture()
def catalogue():
    return InMemoryCatalogue([Book(id="book-a", title="Refactoring", price=Decimal("10.00"), stock_quantity=5)])


class TestBooks:
    def test_prices_are_stored_to_the_cent(self, catalogue):
        book = catalogue.add_book(Book(id="book-b", title="Clean Code", price=Decimal("4.999"), stock_quantity=1))
        assert book.price == Decimal("5.00")

    def test_negative_stock_is_rejected(self, catalogue):
        with pytest.raises(ValueError):
            catalogue.add_book(Book(id="book-b", title="Clean Code", price=Decimal("5"), stock_quantity=-1))

    def test_unknown_book(self, catalogue):
        with pytest.raises(BookNotFound) as exc:
            catalogue.get_book("missing")
        assert exc.value.book_id == "missing"

    def test_set_price_keeps_stock(self, catalogue):
        catalogue.reserve_stock("book-a", 2)
        book = catalogue.set_price("book-a", Decimal("12.50"))
        assert book.price == Decimal("12.50")
        assert book.stock_quantity == 3

    def test_release_of_unknown_book(self, catalogue):
        with pytest.raises(BookNotFound):
            catalogue.release_stock("missing", 1)


class TestConcurrentReservations:
    def test_stock_never_goes_negative(self, catalogue):
        barrier = threading.Barrier(20)
        outcomes = []

        def reserve():
            barrier.wait()
            try:
                catalogue.reserve_stock("book-a", 1)
                outcomes.append("reserved")
            except InsufficientStock:
                outcomes.append("refused")

        with ThreadPoolExecutor(max_workers=20) as pool:
            for _ in range(20):
                pool.submit(reserve)

        assert outcomes.count("reserved") == 5
        assert outcomes.count("refused") == 15
        assert catalogue.get_book("book-a").stock_quantity == 0

    def test_interleaved_reserve_and_release_balance_out(self, catalogue):
        def cycle():
            for _ in range(50):
                catalogue.reserve_stock("book-a", 1)
                catalogue.release_stock("book-a", 1)

        threads = [threading.Thread(target=cycle) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert catalogue.get_book("book-a").stock_quantity == 5


class TestSeedCatalogue:
    def test_seeds_an_empty_catalogue(self):
        catalogue = InMemoryCatalogue()

        assert seed_catalogue(catalogue) == len(SEED_BOOKS)
        assert catalogue.get_book("book-001").price == Decimal("12.99")

    def test_leaves_a_stocked_catalogue_alone(self, catalogue):
        assert seed_catalogue(catalogue) == 0
        assert [book.id for book in catalogue.list_books()] == ["book-a"]
