"""Tests for order notification templates: rendering and registry."""

import pytest
from notifications.templates import TEMPLATE_REGISTRY, get_template
from notifications.templates.formatting import delivery_lines, money, order_summary
from notifications.templates.order_placed import OrderPlacedTemplate
from notifications.templates.order_status_changed import OrderStatusChangedTemplate
from notifications.templates.sub_order_placed import SubOrderPlacedTemplate
from notifications.templates.sub_order_status_changed import SubOrderStatusChangedTemplate
from notifications.types import NotificationChannel, NotificationType


@pytest.fixture()
def order():
    return {
        "id": "ord-1",
        "buyerId": "buyer-001",
        "billing": {"name": "Ama", "email": "ama@example.com"},
        "status": "in_progress",
        "grandTotal": 26.5,
        "createdAt": "2026-04-30T10:00:00+00:00",
        "updatedAt": "2026-04-30T12:00:00+00:00",
        "subOrders": [
            {
                "id": "so-1",
                "sellerId": "seller-a",
                "deliveryMethod": "pickup",
                "pickupInfo": {
                    "timeSlot": "2026-05-01T09:00:00+00:00",
                    "location": {"type": "Point", "coordinates": [-1.62, 6.69]},
                },
                "thirdPartyInfo": None,
                "subtotal": 20.0,
                "status": "accepted",
                "items": [
                    {
                        "id": "i-1",
                        "listingId": "L1",
                        "productName": "Tomatoes",
                        "qty": 2,
                        "priceAtOrder": 10.0,
                        "itemStatus": "accepted",
                    },
                ],
            },
            {
                "id": "so-2",
                "sellerId": "seller-b",
                "deliveryMethod": "thirdParty",
                "pickupInfo": None,
                "thirdPartyInfo": {"partnerOrderId": "GLV-1", "eta": None, "cost": 4.0},
                "subtotal": 6.5,
                "status": "pending",
                "items": [
                    {
                        "id": "i-2",
                        "listingId": "L3",
                        "productName": None,
                        "qty": 1,
                        "priceAtOrder": 6.5,
                        "itemStatus": "pending",
                    },
                ],
            },
        ],
    }


# ---------------------------------------------------------------
# Template registry
# ---------------------------------------------------------------
class TestTemplateRegistry:
    def test_every_notification_type_has_a_template(self):
        for nt in NotificationType:
            assert nt.value in TEMPLATE_REGISTRY, f"Missing template for {nt.value}"

    def test_get_template_returns_correct_class(self):
        assert get_template(NotificationType.ORDER_PLACED.value) is OrderPlacedTemplate

    def test_get_template_unknown_type_raises(self):
        with pytest.raises(ValueError, match="No template registered"):
            get_template("NonexistentType")


# ---------------------------------------------------------------
# Buyer templates
# ---------------------------------------------------------------
class TestOrderPlacedTemplate:
    def test_channels_are_email_and_push(self):
        assert OrderPlacedTemplate.default_channels == [
            NotificationChannel.EMAIL.value,
            NotificationChannel.PUSH.value,
        ]

    def test_subject(self, order):
        assert OrderPlacedTemplate.render(order)["subject"] == "Your order ord-1 has been placed"

    def test_body_lists_items_totals_and_delivery(self, order):
        body = OrderPlacedTemplate.render(order)["body"]

        assert "Hi Ama" in body
        assert "Tomatoes x2 @ 10.00 = 20.00 [accepted]" in body
        assert "Subtotal: 20.00" in body
        assert "Delivery: pickup at 2026-05-01T09:00:00+00:00" in body
        assert "Partner reference: GLV-1" in body
        assert "Grand total: 26.50" in body
        assert "2026-04-30T10:00:00+00:00" in body

    def test_missing_product_name_falls_back_to_listing_id(self, order):
        assert "L3 x1 @ 6.50" in OrderPlacedTemplate.render(order)["body"]


class TestOrderStatusChangedTemplate:
    def test_subject_quotes_the_status(self, order):
        assert OrderStatusChangedTemplate.render(order)["subject"] == 'Order ord-1 status updated to "in_progress"'

    def test_body_carries_update_time(self, order):
        assert "2026-04-30T12:00:00+00:00" in OrderStatusChangedTemplate.render(order)["body"]


# ---------------------------------------------------------------
# Seller templates
# ---------------------------------------------------------------
class TestSellerTemplates:
    def test_seller_templates_are_push_only(self):
        assert SubOrderPlacedTemplate.default_channels == [NotificationChannel.PUSH.value]
        assert SubOrderStatusChangedTemplate.default_channels == [NotificationChannel.PUSH.value]

    def test_sub_order_placed_renders_only_that_slice(self, order):
        context = {**order["subOrders"][1], "orderId": "ord-1"}
        content = SubOrderPlacedTemplate.render(context)

        assert content["subject"] == "New order ord-1"
        assert "Seller seller-b (pending)" in content["body"]
        assert "Tomatoes" not in content["body"]

    def test_sub_order_status_changed(self, order):
        context = {**order["subOrders"][0], "orderId": "ord-1"}

        assert SubOrderStatusChangedTemplate.render(context)["subject"] == "Sub-order so-1 is accepted"


class TestFormatting:
    def test_money(self):
        assert money(3) == "3.00"
        assert money(None) == "0.00"

    def test_pickup_location_is_rendered_lat_lng(self, order):
        assert "Pickup location: 6.69, -1.62" in delivery_lines(order["subOrders"][0])

    def test_summary_without_sub_orders(self):
        assert order_summary({"grandTotal": 0}) == "Grand total: 0.00"
