"""SQL schema for the catalogue and cart store adapters.

Orders are persisted through the Protean provider configured for the
domain; books and cart lines live in plain tables so that stock can be
decremented with a single conditional ``UPDATE``.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Engine,
    Integer,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    String,
    Table,
    create_engine,
)
from sqlalchemy.pool import StaticPool

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("id", String(50), primary_key=True),
    Column("title", String(255), nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("stock_quantity", Integer, nullable=False, default=0),
    CheckConstraint("stock_quantity >= 0", name="ck_books_stock_non_negative"),
)

cart_lines = Table(
    "cart_lines",
    metadata,
    Column("user_id", String(50), nullable=False),
    Column("book_id", String(50), nullable=False),
    Column("quantity", Integer, nullable=False),
    PrimaryKeyConstraint("user_id", "book_id", name="pk_cart_lines"),
    CheckConstraint("quantity > 0", name="ck_cart_lines_quantity_positive"),
)


def make_engine(database_uri: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if database_uri in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_uri,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_uri)


def setup_db(engine: Engine) -> None:
    """Create store tables"""
    metadata.create_all(engine)


def drop_db(engine: Engine) -> None:
    """Drop store tables"""
    metadata.drop_all(engine)
