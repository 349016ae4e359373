"""InventoryLedger: the only component that moves book stock.

Stock Model:
    reserve: atomic "decrement if at least n left", delegated to the store
    release: atomic increment, the inverse of reserve

Multi-line reservations run as a saga: each line is reserved in turn and
the ledger remembers which ones succeeded. When a line fails, exactly
those lines are released again (newest first) before the failure is
re-raised, so a failed checkout leaves stock as it found it.

A compensation that itself fails is logged and parked in
``pending_compensations``; ``retry_compensations()`` drains the queue.
"""

import threading
from dataclasses import dataclass

import structlog

from ordering.catalogue.port import CatalogueStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockLine:
    """A quantity of one book moved by the ledger."""

    book_id: str
    quantity: int


def _as_stock_line(line) -> StockLine:
    return StockLine(book_id=str(line.book_id), quantity=int(line.quantity))


class InventoryLedger:
    def __init__(self, catalogue: CatalogueStore) -> None:
        self.catalogue = catalogue
        self._pending: list[StockLine] = []
        self._pending_lock = threading.Lock()

    # -------------------------------------------------------------------
    # Single-line primitives
    # -------------------------------------------------------------------
    def reserve(self, book_id, quantity) -> int:
        """Reserve ``quantity`` units of a book; returns the stock left.

        Raises ``InsufficientStock`` (stock untouched) or ``BookNotFound``.
        """
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        remaining = self.catalogue.reserve_stock(str(book_id), quantity)
        logger.debug("Stock reserved", book_id=str(book_id), quantity=quantity, remaining=remaining)
        return remaining

    def release(self, book_id, quantity) -> int:
        """Return ``quantity`` units of a book to stock; returns the new level."""
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        level = self.catalogue.release_stock(str(book_id), quantity)
        logger.debug("Stock released", book_id=str(book_id), quantity=quantity, stock=level)
        return level

    # -------------------------------------------------------------------
    # Batches
    # -------------------------------------------------------------------
    def reserve_all(self, lines) -> list[StockLine]:
        """Reserve every line or none of them.

        ``lines`` is any iterable of objects with ``book_id`` and
        ``quantity``. Returns the reserved lines for a later
        ``release_all``.
        """
        reserved: list[StockLine] = []
        for line in map(_as_stock_line, lines):
            try:
                self.reserve(line.book_id, line.quantity)
            except Exception:
                logger.info(
                    "Reservation failed, compensating",
                    book_id=line.book_id,
                    quantity=line.quantity,
                    compensating=len(reserved),
                )
                self._compensate(reversed(reserved))
                raise
            reserved.append(line)
        return reserved

    def release_all(self, lines) -> None:
        """Release every line; failures are queued rather than lost."""
        self._compensate(map(_as_stock_line, lines))

    # -------------------------------------------------------------------
    # Compensation queue
    # -------------------------------------------------------------------
    @property
    def pending_compensations(self) -> list[StockLine]:
        with self._pending_lock:
            return list(self._pending)

    def retry_compensations(self) -> int:
        """Retry parked releases; returns how many are still pending."""
        with self._pending_lock:
            queued, self._pending = self._pending, []
        self._compensate(queued)
        return len(self.pending_compensations)

    def _compensate(self, lines) -> None:
        for line in lines:
            try:
                self.release(line.book_id, line.quantity)
            except Exception:
                logger.exception(
                    "Stock release failed, queued for retry",
                    book_id=line.book_id,
                    quantity=line.quantity,
                )
                with self._pending_lock:
                    self._pending.append(line)
