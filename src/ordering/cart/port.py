"""Cart store port (abstract interface).

A cart is the set of lines a user intends to buy, at most one line per
book. The ordering core reads carts at checkout and removes the lines it
ordered once the order is persisted.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CartLine:
    user_id: str
    book_id: str
    quantity: int


class CartStore(ABC):
    """Abstract cart store interface."""

    @abstractmethod
    def get_cart_lines(self, user_id: str) -> list[CartLine]:
        """Return the user's lines in the order they were first added."""
        ...

    @abstractmethod
    def get_line(self, user_id: str, book_id: str) -> CartLine | None: ...

    @abstractmethod
    def set_line(self, user_id: str, book_id: str, quantity: int) -> CartLine:
        """Create the line for (user, book) or overwrite its quantity."""
        ...

    @abstractmethod
    def remove_line(self, user_id: str, book_id: str) -> bool:
        """Delete the line. Returns False when there was nothing to delete."""
        ...

    @abstractmethod
    def clear_cart(self, user_id: str) -> None: ...

    @abstractmethod
    def remove_lines(self, lines: list[CartLine]) -> int:
        """Delete exactly these lines, each only while its quantity is unchanged.

        Lines added or re-quantified since ``lines`` was read are left in
        place. Returns how many lines were deleted.
        """
        ...
