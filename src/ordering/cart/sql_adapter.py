"""SQLAlchemy cart store."""

from sqlalchemy import Engine, delete, insert, select, update

from ordering.cart.port import CartLine, CartStore
from ordering.utils.db import cart_lines


def _to_line(row) -> CartLine:
    return CartLine(user_id=row.user_id, book_id=row.book_id, quantity=row.quantity)


class SqlCartStore(CartStore):
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def get_cart_lines(self, user_id: str) -> list[CartLine]:
        query = select(cart_lines).where(cart_lines.c.user_id == str(user_id)).order_by(cart_lines.c.book_id)
        with self.engine.connect() as conn:
            return [_to_line(row) for row in conn.execute(query)]

    def get_line(self, user_id: str, book_id: str) -> CartLine | None:
        query = select(cart_lines).where(
            cart_lines.c.user_id == str(user_id),
            cart_lines.c.book_id == str(book_id),
        )
        with self.engine.connect() as conn:
            row = conn.execute(query).first()
        return _to_line(row) if row is not None else None

    def set_line(self, user_id: str, book_id: str, quantity: int) -> CartLine:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        line = CartLine(user_id=str(user_id), book_id=str(book_id), quantity=quantity)
        with self.engine.begin() as conn:
            result = conn.execute(
                update(cart_lines)
                .where(cart_lines.c.user_id == line.user_id, cart_lines.c.book_id == line.book_id)
                .values(quantity=quantity)
            )
            if result.rowcount == 0:
                conn.execute(insert(cart_lines).values(user_id=line.user_id, book_id=line.book_id, quantity=quantity))
        return line

    def remove_line(self, user_id: str, book_id: str) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(
                delete(cart_lines).where(
                    cart_lines.c.user_id == str(user_id),
                    cart_lines.c.book_id == str(book_id),
                )
            )
        return result.rowcount > 0

    def clear_cart(self, user_id: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(delete(cart_lines).where(cart_lines.c.user_id == str(user_id)))

    def remove_lines(self, lines: list[CartLine]) -> int:
        removed = 0
        with self.engine.begin() as conn:
            for line in lines:
                result = conn.execute(
                    delete(cart_lines).where(
                        cart_lines.c.user_id == line.user_id,
                        cart_lines.c.book_id == line.book_id,
                        cart_lines.c.quantity == line.quantity,
                    )
                )
                removed += result.rowcount
        return removed
