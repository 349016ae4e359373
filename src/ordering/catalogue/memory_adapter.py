"""In-memory catalogue store for development and testing.

Each book's stock counter is guarded by its own lock, so reservations on
one book are linearizable while reservations on different books proceed
in parallel.
"""

import threading
from dataclasses import replace
from decimal import Decimal

from ordering.catalogue.port import Book, CatalogueStore
from ordering.exceptions import BookNotFound, InsufficientStock
from ordering.utils.locks import KeyedLock
from ordering.utils.money import to_money


class InMemoryCatalogue(CatalogueStore):
    def __init__(self, books: list[Book] | None = None) -> None:
        self._books: dict[str, Book] = {}
        self._books_lock = threading.Lock()
        self._stock_locks = KeyedLock()
        for book in books or []:
            self.add_book(book)

    def add_book(self, book: Book) -> Book:
        if book.stock_quantity < 0:
            raise ValueError("stock_quantity must not be negative")
        record = replace(book, id=str(book.id), price=to_money(book.price))
        with self._stock_locks.hold(record.id), self._books_lock:
            self._books[record.id] = record
        return record

    def get_book(self, book_id: str) -> Book:
        with self._books_lock:
            book = self._books.get(str(book_id))
        if book is None:
            raise BookNotFound(book_id)
        return book

    def list_books(self) -> list[Book]:
        with self._books_lock:
            return list(self._books.values())

    def set_price(self, book_id: str, price: Decimal) -> Book:
        with self._stock_locks.hold(book_id):
            book = replace(self.get_book(book_id), price=to_money(price))
            with self._books_lock:
                self._books[book.id] = book
        return book

    def reserve_stock(self, book_id: str, quantity: int) -> int:
        with self._stock_locks.hold(book_id):
            book = self.get_book(book_id)
            if book.stock_quantity < quantity:
                raise InsufficientStock(book.id, quantity, book.stock_quantity)
            return self._store_stock(book, book.stock_quantity - quantity)

    def release_stock(self, book_id: str, quantity: int) -> int:
        with self._stock_locks.hold(book_id):
            book = self.get_book(book_id)
            return self._store_stock(book, book.stock_quantity + quantity)

    def _store_stock(self, book: Book, stock_quantity: int) -> int:
        with self._books_lock:
            self._books[book.id] = replace(book, stock_quantity=stock_quantity)
        return stock_quantity
