"""Catalogue store port (abstract interface).

The ordering core reads book prices and moves stock only through this
contract. Adapters must make ``reserve_stock`` a single atomic
check-and-decrement: stock is never read, compared in application code
and written back as separate steps.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Book:
    """A catalogue record as seen by the ordering core."""

    id: str
    title: str
    price: Decimal
    stock_quantity: int


class CatalogueStore(ABC):
    """Abstract catalogue store interface."""

    @abstractmethod
    def add_book(self, book: Book) -> Book:
        """Insert or replace a book record."""
        ...

    @abstractmethod
    def get_book(self, book_id: str) -> Book:
        """Return the current book record. Raises ``BookNotFound``."""
        ...

    @abstractmethod
    def list_books(self) -> list[Book]: ...

    @abstractmethod
    def set_price(self, book_id: str, price: Decimal) -> Book: ...

    @abstractmethod
    def reserve_stock(self, book_id: str, quantity: int) -> int:
        """Decrement stock by ``quantity`` only if enough is available.

        Returns the stock left after the decrement. Raises
        ``InsufficientStock`` without touching stock otherwise.
        """
        ...

    @abstractmethod
    def release_stock(self, book_id: str, quantity: int) -> int:
        """Increment stock by ``quantity`` and return the new level."""
        ...
