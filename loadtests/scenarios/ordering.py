"""Ordering load test scenarios.

Three stateful SequentialTaskSet journeys: filling a cart and checking
out, walking an order through to delivery, and cancelling an order so
its stock goes back on the shelf.

Running out of stock is a legitimate outcome under load, so a 400 for
short stock is recorded as a success and ends the journey.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import basket, cart_item_data, checkout_data, unique_user_id
from loadtests.helpers.response import extract_error_detail, is_stock_refusal
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    """Shared steps: fill a cart, then check it out."""

    def on_start(self):
        self.state = ShopperState(user_id=unique_user_id(), book_ids=basket())

    def fill_cart(self):
        for book_id in self.state.book_ids:
            with self.client.post(
                f"/carts/{self.state.user_id}/items",
                json=cart_item_data(book_id),
                catch_response=True,
                name="POST /carts/{user_id}/items",
            ) as resp:
                if is_stock_refusal(resp):
                    resp.success()
                elif resp.status_code != 200:
                    resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    def checkout(self):
        with self.client.post(
            "/checkout",
            json=checkout_data(self.state.user_id),
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            elif resp.status_code == 400:
                # Sold out between cart and checkout, or nothing made it into the cart
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def move_to(self, status):
        with self.client.patch(
            f"/orders/{self.state.order_id}/status",
            json={"status": status},
            catch_response=True,
            name="PATCH /orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"Move to {status} failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()


class CheckoutJourney(_ShopperJourney):
    """Fill Cart -> Review Cart -> Checkout -> Fetch Order."""

    @task
    def add_items(self):
        self.fill_cart()

    @task
    def review_cart(self):
        self.client.get(f"/carts/{self.state.user_id}", name="GET /carts/{user_id}")

    @task
    def place_order(self):
        self.checkout()

    @task
    def fetch_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}",
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class DeliveryJourney(_ShopperJourney):
    """Checkout -> Processing -> Shipped -> Delivered -> List My Orders."""

    @task
    def place_order(self):
        self.fill_cart()
        self.checkout()

    @task
    def processing(self):
        self.move_to("Processing")

    @task
    def shipped(self):
        self.move_to("Shipped")

    @task
    def delivered(self):
        self.move_to("Delivered")

    @task
    def list_orders(self):
        self.client.get("/orders", params={"user_id": self.state.user_id}, name="GET /orders?user_id")

    @task
    def done(self):
        self.interrupt()


class CancellationJourney(_ShopperJourney):
    """Checkout -> Cancel -> Cancel again (must report no change)."""

    @task
    def place_order(self):
        self.fill_cart()
        self.checkout()

    @task
    def cancel(self):
        with self.client.delete(
            f"/orders/{self.state.order_id}",
            catch_response=True,
            name="DELETE /orders/{id}",
        ) as resp:
            if resp.status_code == 200 and resp.json()["cancelled"]:
                self.state.current_status = "Cancelled"
            else:
                resp.failure(f"Cancel failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def cancel_again(self):
        with self.client.delete(
            f"/orders/{self.state.order_id}",
            catch_response=True,
            name="DELETE /orders/{id} (repeat)",
        ) as resp:
            if resp.status_code != 200 or resp.json()["cancelled"]:
                resp.failure(f"Repeat cancel was not a no-op: {resp.status_code}: {resp.text[:200]}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Locust user simulating bookstore shoppers.

    Weighted distribution:
    - 50% Checkout
    - 30% Delivery lifecycle
    - 20% Cancellation
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        CheckoutJourney: 5,
        DeliveryJourney: 3,
        CancellationJourney: 2,
    }
