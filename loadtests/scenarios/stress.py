"""Stress test scenarios for stock contention.

StockContentionUser sends every checkout at a small set of hot listings so
the listing store's conditional decrement is raced as hard as possible.
SpikeUser simulates a sudden burst of ordinary multi-seller checkouts.
"""

import os
import random

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import buyer_headers, contended_order_data, order_data
from loadtests.helpers.response import extract_error_detail

HOT_LISTINGS = os.environ.get("LOADTEST_HOT_LISTINGS", "LT-LISTING-0001,LT-LISTING-0006").split(",")


class StockContentionUser(HttpUser):
    """Stress test: many buyers racing for a few listings.

    Once a listing is sold out, every checkout must come back as a 400
    stock shortfall, never as a 500. Successful checkouts over the whole
    run must add up to at most the seeded quantity.
    """

    wait_time = constant_pacing(0.1)  # ~10 requests/sec per user

    def on_start(self):
        self.headers = buyer_headers()

    @task
    def buy_hot_listing(self):
        with self.client.post(
            "/orders",
            json=contended_order_data(random.choice(HOT_LISTINGS)),
            headers=self.headers,
            catch_response=True,
            name="[CONTENTION] POST /orders",
        ) as resp:
            if resp.status_code in (201, 400):
                resp.success()
            else:
                resp.failure(f"Contended checkout failed: {resp.status_code}: {extract_error_detail(resp)}")


class SpikeUser(HttpUser):
    """Spike test: rapid-fire checkouts.

    Use with high user count and instant spawn rate to simulate
    sudden traffic bursts.
    """

    wait_time = constant_pacing(0.05)  # ~20 req/sec per user

    @task
    def rapid_checkout(self):
        self.client.post(
            "/orders",
            json=order_data(num_sellers=2),
            headers=buyer_headers(),
            name="[SPIKE] POST /orders",
        )
