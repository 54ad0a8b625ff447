"""Pydantic request schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal protean commands. Field names on the wire are camelCase.

A sub-order is a tagged union on ``deliveryMethod``: the pickup variant
only accepts ``pickupInfo`` and the third-party variant only accepts
``thirdPartyInfo``.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class BillingSchema(_Schema):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(min_length=1, max_length=50)
    address: str = Field(min_length=1, max_length=500)
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)


class PointSchema(_Schema):
    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]  # [longitude, latitude]


class PickupInfoSchema(_Schema):
    time_slot: datetime = Field(alias="timeSlot")
    location: PointSchema | None = None

    def to_domain(self) -> dict:
        longitude, latitude = self.location.coordinates if self.location else (None, None)
        return {
            "time_slot": self.time_slot.isoformat(),
            "longitude": longitude,
            "latitude": latitude,
        }


class ThirdPartyInfoSchema(_Schema):
    partner_order_id: str | None = Field(None, alias="partnerOrderId", max_length=255)
    eta: datetime | None = None
    cost: float | None = Field(None, ge=0)

    def to_domain(self) -> dict:
        return {
            "partner_order_id": self.partner_order_id,
            "eta": self.eta.isoformat() if self.eta else None,
            "cost": self.cost,
        }


class OrderItemRequest(_Schema):
    listing: str = Field(min_length=1)
    qty: int = Field(ge=1)


class PickupSubOrderRequest(_Schema):
    seller: str = Field(min_length=1)
    delivery_method: Literal["pickup"] = Field(alias="deliveryMethod")
    pickup_info: PickupInfoSchema = Field(alias="pickupInfo")
    items: list[OrderItemRequest] = Field(min_length=1)

    def to_domain(self) -> dict:
        return {
            "seller_id": self.seller,
            "delivery_method": self.delivery_method,
            "pickup": self.pickup_info.to_domain(),
            "third_party": None,
            "items": [{"listing_id": item.listing, "qty": item.qty} for item in self.items],
        }


class ThirdPartySubOrderRequest(_Schema):
    seller: str = Field(min_length=1)
    delivery_method: Literal["thirdParty"] = Field(alias="deliveryMethod")
    third_party_info: ThirdPartyInfoSchema = Field(default_factory=ThirdPartyInfoSchema, alias="thirdPartyInfo")
    items: list[OrderItemRequest] = Field(min_length=1)

    def to_domain(self) -> dict:
        return {
            "seller_id": self.seller,
            "delivery_method": self.delivery_method,
            "pickup": None,
            "third_party": self.third_party_info.to_domain(),
            "items": [{"listing_id": item.listing, "qty": item.qty} for item in self.items],
        }


SubOrderRequest = Annotated[
    PickupSubOrderRequest | ThirdPartySubOrderRequest,
    Field(discriminator="delivery_method"),
]


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(_Schema):
    billing: BillingSchema
    sub_orders: list[SubOrderRequest] = Field(alias="subOrders", min_length=1)

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "billing": {
                        "name": "Ama Mensah",
                        "email": "ama@example.com",
                        "phone": "+233 20 000 0000",
                        "address": "12 Market Road",
                        "city": "Kumasi",
                        "country": "Ghana",
                    },
                    "subOrders": [
                        {
                            "seller": "seller-001",
                            "deliveryMethod": "pickup",
                            "pickupInfo": {
                                "timeSlot": "2026-05-01T09:00:00Z",
                                "location": {"type": "Point", "coordinates": [-1.62, 6.69]},
                            },
                            "items": [{"listing": "listing-001", "qty": 2}],
                        }
                    ],
                }
            ]
        },
    )


class UpdateItemStatusRequest(_Schema):
    item_status: str = Field(alias="itemStatus")


class UpdateSubOrderStatusRequest(_Schema):
    status: str
    item_status: str | None = Field(None, alias="itemStatus")


class UpdateOrderStatusRequest(_Schema):
    """``status: null`` clears the admin override."""

    status: str | None
