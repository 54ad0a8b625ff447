"""Tests for the pure status derivation functions."""

from itertools import permutations

import pytest
from ordering.order.status import derive_order_status, derive_sub_order_status


class TestDeriveSubOrderStatus:
    def test_no_items_is_pending(self):
        assert derive_sub_order_status([]) == "pending"

    def test_all_delivered(self):
        assert derive_sub_order_status(["delivered", "delivered"]) == "delivered"

    def test_all_cancelled(self):
        assert derive_sub_order_status(["cancelled", "cancelled"]) == "cancelled"

    def test_all_pending(self):
        assert derive_sub_order_status(["pending", "pending"]) == "pending"

    @pytest.mark.parametrize("active", ["accepted", "ready", "in_transit"])
    def test_any_active_item_means_in_progress(self, active):
        assert derive_sub_order_status(["pending", active]) == "in_progress"

    def test_active_item_beats_partial_delivery(self):
        assert derive_sub_order_status(["delivered", "accepted"]) == "in_progress"

    def test_delivered_with_pending_is_partially_delivered(self):
        assert derive_sub_order_status(["delivered", "pending"]) == "partially_delivered"

    def test_delivered_with_cancelled_is_partially_delivered(self):
        assert derive_sub_order_status(["delivered", "cancelled"]) == "partially_delivered"

    def test_rejected_with_pending_falls_through_to_in_progress(self):
        assert derive_sub_order_status(["pending", "rejected"]) == "in_progress"

    def test_cancelled_with_pending_is_in_progress(self):
        assert derive_sub_order_status(["cancelled", "pending"]) == "in_progress"

    def test_accepts_any_iterable(self):
        assert derive_sub_order_status(s for s in ["delivered"]) == "delivered"

    def test_result_ignores_item_order(self):
        statuses = ["delivered", "pending", "ready", "cancelled"]
        results = {derive_sub_order_status(list(p)) for p in permutations(statuses)}
        assert results == {"in_progress"}


class TestDeriveOrderStatus:
    def test_no_sub_orders_is_pending(self):
        assert derive_order_status([]) == "pending"

    def test_all_delivered(self):
        assert derive_order_status(["delivered", "delivered"]) == "delivered"

    def test_all_cancelled(self):
        assert derive_order_status(["cancelled"]) == "cancelled"

    def test_any_delivered_is_partially_delivered(self):
        assert derive_order_status(["delivered", "accepted"]) == "partially_delivered"

    def test_delivered_and_cancelled_is_partially_delivered(self):
        assert derive_order_status(["delivered", "cancelled"]) == "partially_delivered"

    def test_all_pending(self):
        assert derive_order_status(["pending", "pending"]) == "pending"

    @pytest.mark.parametrize(
        "statuses",
        [
            ["pending", "accepted"],
            ["in_progress"],
            ["partially_delivered", "pending"],
            ["rejected"],
            ["pending", "cancelled"],
        ],
    )
    def test_everything_else_is_in_progress(self, statuses):
        assert derive_order_status(statuses) == "in_progress"

    def test_result_ignores_sub_order_order(self):
        statuses = ["delivered", "pending", "cancelled"]
        results = {derive_order_status(list(p)) for p in permutations(statuses)}
        assert results == {"partially_delivered"}
