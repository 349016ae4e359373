"""Stress scenario for stock contention.

Every LastCopyContentionUser buys the same book as fast as it can. With
correct reservations the number of successful checkouts for that book
never exceeds its starting stock, and the API never answers 500.
"""

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import CONTENDED_BOOK_ID, checkout_data, unique_user_id
from loadtests.helpers.response import extract_error_detail, is_stock_refusal


class LastCopyContentionUser(HttpUser):
    """Spawn many of these at once to race for ``CONTENDED_BOOK_ID``."""

    wait_time = constant_pacing(0.1)  # ~10 requests/sec per user

    @task
    def race_for_the_book(self):
        user_id = unique_user_id()
        with self.client.post(
            f"/carts/{user_id}/items",
            json={"book_id": CONTENDED_BOOK_ID, "quantity": 1},
            catch_response=True,
            name="[CONTENTION] POST /carts/{user_id}/items",
        ) as resp:
            if is_stock_refusal(resp):
                resp.success()
                return
            if resp.status_code != 200:
                resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")
                return

        with self.client.post(
            "/checkout",
            json=checkout_data(user_id),
            catch_response=True,
            name="[CONTENTION] POST /checkout",
        ) as resp:
            if resp.status_code == 201 or is_stock_refusal(resp):
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
