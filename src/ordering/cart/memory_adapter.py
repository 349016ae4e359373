"""In-memory cart store for development and testing."""

import threading

from ordering.cart.port import CartLine, CartStore


class InMemoryCartStore(CartStore):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        # user_id -> {book_id: CartLine}; dicts keep insertion order
        self._carts: dict[str, dict[str, CartLine]] = {}

    def get_cart_lines(self, user_id: str) -> list[CartLine]:
        with self._lock:
            return list(self._carts.get(str(user_id), {}).values())

    def get_line(self, user_id: str, book_id: str) -> CartLine | None:
        with self._lock:
            return self._carts.get(str(user_id), {}).get(str(book_id))

    def set_line(self, user_id: str, book_id: str, quantity: int) -> CartLine:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        line = CartLine(user_id=str(user_id), book_id=str(book_id), quantity=quantity)
        with self._lock:
            self._carts.setdefault(line.user_id, {})[line.book_id] = line
        return line

    def remove_line(self, user_id: str, book_id: str) -> bool:
        with self._lock:
            return self._carts.get(str(user_id), {}).pop(str(book_id), None) is not None

    def clear_cart(self, user_id: str) -> None:
        with self._lock:
            self._carts.pop(str(user_id), None)

    def remove_lines(self, lines: list[CartLine]) -> int:
        removed = 0
        with self._lock:
            for line in lines:
                cart = self._carts.get(line.user_id, {})
                if cart.get(line.book_id) == line:
                    del cart[line.book_id]
                    removed += 1
        return removed
