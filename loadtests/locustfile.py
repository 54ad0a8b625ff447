"""Harvestlane Load Testing: Locust entry point.

Discovers all user classes from the scenarios package. The target server
must read listings from a database seeded with
``python src/manage.py seed-listings``.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Mixed workload only:
    locust -f loadtests/locustfile.py MixedWorkloadUser

    # Stock contention:
    locust -f loadtests/locustfile.py StockContentionUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py MixedWorkloadUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.mixed import MixedWorkloadUser  # noqa: F401
from loadtests.scenarios.ordering import BuyerUser, SellerUser  # noqa: F401
from loadtests.scenarios.stress import SpikeUser, StockContentionUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios, so no per-task wiring is needed.
    Extracts the API error body so you see "Only 0 Tomatoes available..."
    instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Check the target is up and log a marker when the load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if environment.host:
        try:
            resp = requests.get(f"{environment.host}/health", timeout=5)
            print(f"[LOADTEST] Health: {resp.status_code} {resp.text[:200]}")
        except requests.RequestException as e:
            print(f"[LOADTEST] Health check failed: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}\n")
