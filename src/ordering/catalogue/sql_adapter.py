"""SQLAlchemy catalogue store.

Stock moves are single conditional statements; the database serialises
concurrent updates to the same row, so no application-side lock is held.
"""

from decimal import Decimal

from sqlalchemy import Engine, insert, select, update

from ordering.catalogue.port import Book, CatalogueStore
from ordering.exceptions import BookNotFound, InsufficientStock
from ordering.utils.db import books
from ordering.utils.money import to_money


def _to_book(row) -> Book:
    return Book(
        id=row.id,
        title=row.title,
        price=to_money(row.price),
        stock_quantity=row.stock_quantity,
    )


class SqlCatalogue(CatalogueStore):
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def add_book(self, book: Book) -> Book:
        if book.stock_quantity < 0:
            raise ValueError("stock_quantity must not be negative")
        values = {
            "title": book.title,
            "price": to_money(book.price),
            "stock_quantity": book.stock_quantity,
        }
        with self.engine.begin() as conn:
            result = conn.execute(update(books).where(books.c.id == str(book.id)).values(**values))
            if result.rowcount == 0:
                conn.execute(insert(books).values(id=str(book.id), **values))
        return self.get_book(book.id)

    def get_book(self, book_id: str) -> Book:
        with self.engine.connect() as conn:
            row = conn.execute(select(books).where(books.c.id == str(book_id))).first()
        if row is None:
            raise BookNotFound(book_id)
        return _to_book(row)

    def list_books(self) -> list[Book]:
        with self.engine.connect() as conn:
            return [_to_book(row) for row in conn.execute(select(books).order_by(books.c.id))]

    def set_price(self, book_id: str, price: Decimal) -> Book:
        with self.engine.begin() as conn:
            result = conn.execute(update(books).where(books.c.id == str(book_id)).values(price=to_money(price)))
        if result.rowcount == 0:
            raise BookNotFound(book_id)
        return self.get_book(book_id)

    def reserve_stock(self, book_id: str, quantity: int) -> int:
        book_id = str(book_id)
        with self.engine.begin() as conn:
            result = conn.execute(
                update(books)
                .where(books.c.id == book_id, books.c.stock_quantity >= quantity)
                .values(stock_quantity=books.c.stock_quantity - quantity)
            )
            if result.rowcount == 1:
                return conn.execute(select(books.c.stock_quantity).where(books.c.id == book_id)).scalar_one()

        # Nothing was written; report why. The level read here is later than
        # the UPDATE, so it is only quoted while it still shows a shortage.
        level = self.get_book(book_id).stock_quantity
        raise InsufficientStock(book_id, quantity, level if level < quantity else None)

    def release_stock(self, book_id: str, quantity: int) -> int:
        book_id = str(book_id)
        with self.engine.begin() as conn:
            result = conn.execute(
                update(books)
                .where(books.c.id == book_id)
                .values(stock_quantity=books.c.stock_quantity + quantity)
            )
            if result.rowcount == 0:
                raise BookNotFound(book_id)
            return conn.execute(select(books.c.stock_quantity).where(books.c.id == book_id)).scalar_one()
