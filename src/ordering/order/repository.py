"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order

# Protean caps a single query at 100 rows, so lists are read in pages
PAGE_SIZE = 100


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order queries beyond get-by-id. Results are newest first and complete."""

    def find_by_user(self, user_id) -> list[Order]:
        return self._newest_first(user_id=str(user_id))

    def find_by_status(self, status) -> list[Order]:
        return self._newest_first(status=status)

    def find_all(self) -> list[Order]:
        return self._newest_first()

    def _newest_first(self, **filters) -> list[Order]:
        query = self._dao.query
        if filters:
            query = query.filter(**filters)
        query = query.order_by("-order_date").limit(PAGE_SIZE)

        orders: list[Order] = []
        while True:
            page = query.offset(len(orders)).all().items
            orders.extend(page)
            if len(page) < PAGE_SIZE:
                return orders
