"""Ordering load test scenarios.

Stateful SequentialTaskSet journeys for the two sides of the marketplace:
a buyer checking out across sellers and reading the order back, and a
seller walking their items from pending to delivered.
"""

import random

from locust import HttpUser, SequentialTaskSet, TaskSet, between, task

from loadtests.data_generators import (
    ITEM_STATUSES,
    buyer_headers,
    order_data,
    seller_headers,
    seller_id,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BuyerState, SellerState


class BuyerCheckoutJourney(SequentialTaskSet):
    """Place Order -> Get Order -> List Orders.

    Every checkout reserves stock on each seeded listing it names. A 400
    with a stock shortfall is an expected outcome once listings run low and
    is not counted as a failure.
    """

    def on_start(self):
        self.state = BuyerState()
        self.state.headers = buyer_headers()
        self.state.buyer_id = self.state.headers["X-User-Id"]

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["id"]
                self.state.sub_order_ids = [so["id"] for so in body["subOrders"]]
                self.state.current_status = body["status"]
            elif resp.status_code == 400 and "available" in extract_error_detail(resp):
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def get_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def list_orders(self):
        with self.client.get(
            "/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif self.state.order_id not in {order["id"] for order in resp.json()}:
                resp.failure("Placed order missing from the buyer's order list")

    @task
    def done(self):
        self.interrupt()


class SellerFulfilmentJourney(TaskSet):
    """List own sub-orders, then advance items one at a time or a whole
    sub-order at once.

    Item updates from many sellers land on the same multi-seller orders,
    so a 409 is an expected outcome of the per-order lock and is retried
    on the next tick rather than counted as a failure.
    """

    def on_start(self):
        self.state = SellerState(seller_id=seller_id())
        self.state.headers = seller_headers(self.state.seller_id)

    @task(1)
    def list_sub_orders(self):
        with self.client.get(
            "/orders/seller/sub-orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/seller/sub-orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List sub-orders failed: {resp.status_code}: {extract_error_detail(resp)}")
                return
            self.state.open_items = [
                (order["orderId"], sub_order["id"], item["id"])
                for order in resp.json()
                for sub_order in order["subOrders"]
                for item in sub_order["items"]
                if item["itemStatus"] not in ("delivered", "cancelled")
            ]

    @task(4)
    def advance_item(self):
        if not self.state.open_items:
            return
        order_id, sub_order_id, item_id = random.choice(self.state.open_items)
        with self.client.patch(
            f"/orders/{order_id}/sub-orders/{sub_order_id}/items/{item_id}/status",
            json={"itemStatus": random.choice(ITEM_STATUSES)},
            headers=self.state.headers,
            catch_response=True,
            name="PATCH /orders/{id}/sub-orders/{id}/items/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                sub_order = next(so for so in resp.json()["subOrders"] if so["id"] == sub_order_id)
                item = next(i for i in sub_order["items"] if i["id"] == item_id)
                if item["itemStatus"] == "delivered":
                    self.state.open_items.remove((order_id, sub_order_id, item_id))
                    self.state.delivered_count += 1
            elif resp.status_code == 409:
                resp.success()
            else:
                resp.failure(f"Update item failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task(1)
    def mark_sub_order_ready(self):
        if not self.state.open_items:
            return
        order_id, sub_order_id, _ = random.choice(self.state.open_items)
        with self.client.patch(
            f"/orders/{order_id}/sub-orders/{sub_order_id}/status",
            json={"status": "ready", "itemStatus": "ready"},
            headers=self.state.headers,
            catch_response=True,
            name="PATCH /orders/{id}/sub-orders/{id}/status",
        ) as resp:
            if resp.status_code == 409:
                resp.success()
            elif resp.status_code != 200:
                resp.failure(f"Update sub-order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task(1)
    def stop(self):
        self.interrupt()


class BuyerUser(HttpUser):
    """Buyers only: checkout pressure on the listing store."""

    wait_time = between(0.5, 2.0)
    tasks = [BuyerCheckoutJourney]


class SellerUser(HttpUser):
    """Sellers only: status updates against existing orders."""

    wait_time = between(0.5, 2.0)
    tasks = [SellerFulfilmentJourney]
