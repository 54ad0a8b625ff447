"""Tests for order visibility and management rules."""

import pytest
from ordering.errors import Forbidden
from ordering.order.access import (
    Principal,
    can_view,
    ensure_admin,
    ensure_can_manage_sub_order,
    ensure_can_view,
)
from ordering.order.order import Order

BILLING = {"name": "Esi", "email": "esi@example.com", "phone": "0200000000", "address": "1 Road"}


@pytest.fixture()
def order():
    return Order.place(
        buyer_id="buyer-001",
        billing=BILLING,
        sub_orders_data=[
            {
                "seller_id": seller_id,
                "delivery_method": "thirdParty",
                "pickup": None,
                "third_party": {"partner_order_id": f"P-{seller_id}"},
                "items": [{"listing_id": f"{seller_id}-L", "product_name": "Maize", "qty": 1, "price_at_order": 1.0}],
            }
            for seller_id in ("seller-a", "seller-b")
        ],
    )


class TestPrincipal:
    def test_defaults_to_buyer(self):
        principal = Principal(user_id="u-1")
        assert not principal.admin
        assert not principal.seller

    def test_admin_flag_grants_admin_whatever_the_role(self):
        assert Principal(user_id="u-1", role="seller", is_admin=True).admin

    def test_admin_role(self):
        assert Principal(user_id="u-1", role="admin").admin


class TestVisibility:
    def test_buyer_sees_own_order(self, order):
        assert can_view(Principal(user_id="buyer-001"), order)

    def test_other_buyer_does_not(self, order):
        with pytest.raises(Forbidden):
            ensure_can_view(Principal(user_id="buyer-999"), order)

    def test_seller_with_a_sub_order_sees_the_order(self, order):
        assert can_view(Principal(user_id="seller-b", role="seller"), order)

    def test_seller_without_a_sub_order_does_not(self, order):
        assert not can_view(Principal(user_id="seller-z", role="seller"), order)

    def test_seller_id_matching_the_buyer_id_is_not_enough(self, order):
        assert not can_view(Principal(user_id="buyer-001", role="seller"), order)

    def test_admin_sees_everything(self, order):
        assert can_view(Principal(user_id="admin-001", role="admin"), order)


class TestManagement:
    def test_seller_manages_own_sub_order(self, order):
        sub_order = next(so for so in order.sub_orders if so.seller_id == "seller-a")
        ensure_can_manage_sub_order(Principal(user_id="seller-a", role="seller"), sub_order)

    def test_seller_cannot_manage_another_sellers_sub_order(self, order):
        sub_order = next(so for so in order.sub_orders if so.seller_id == "seller-b")
        with pytest.raises(Forbidden):
            ensure_can_manage_sub_order(Principal(user_id="seller-a", role="seller"), sub_order)

    def test_buyer_cannot_manage_sub_orders(self, order):
        with pytest.raises(Forbidden):
            ensure_can_manage_sub_order(Principal(user_id="buyer-001"), order.sub_orders[0])

    def test_admin_manages_any_sub_order(self, order):
        ensure_can_manage_sub_order(Principal(user_id="admin-001", role="admin"), order.sub_orders[1])

    def test_only_admins_pass_ensure_admin(self):
        ensure_admin(Principal(user_id="u-1", is_admin=True))
        with pytest.raises(Forbidden):
            ensure_admin(Principal(user_id="seller-a", role="seller"))
