"""Starter catalogue for local runs and load tests."""

from decimal import Decimal

import structlog

from ordering.catalogue.port import Book, CatalogueStore

logger = structlog.get_logger(__name__)

SEED_BOOKS = [
    Book(id="book-001", title="Harry Potter and the Philosopher's Stone", price=Decimal("12.99"), stock_quantity=50),
    Book(id="book-002", title="The Shining", price=Decimal("14.99"), stock_quantity=30),
    Book(id="book-003", title="Murder on the Orient Express", price=Decimal("11.99"), stock_quantity=25),
    Book(id="book-004", title="The Da Vinci Code", price=Decimal("13.99"), stock_quantity=40),
    Book(id="book-005", title="The Firm", price=Decimal("12.99"), stock_quantity=35),
    Book(id="book-006", title="The Hunger Games", price=Decimal("15.99"), stock_quantity=45),
    Book(id="book-007", title="Divergent", price=Decimal("14.99"), stock_quantity=40),
    Book(id="book-008", title="A Game of Thrones", price=Decimal("18.99"), stock_quantity=30),
    Book(id="book-009", title="The Notebook", price=Decimal("11.99"), stock_quantity=55),
    Book(id="book-010", title="Along Came a Spider", price=Decimal("13.99"), stock_quantity=38),
]


def seed_catalogue(catalogue: CatalogueStore) -> int:
    """Load SEED_BOOKS into an empty catalogue; returns how many were added."""
    if catalogue.list_books():
        logger.info("Catalogue already has books, skipping seed")
        return 0

    for book in SEED_BOOKS:
        catalogue.add_book(book)
    logger.info("Catalogue seeded", book_count=len(SEED_BOOKS))
    return len(SEED_BOOKS)
