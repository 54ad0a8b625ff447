"""FastAPI routes for the Ordering domain.

Mutating routes forward the before/after snapshots returned by the domain
to the audit sink, then answer with the populated order view.
"""

from fastapi import APIRouter, Depends, Response

from ordering.api.dependencies import get_principal
from ordering.api.schemas import (
    CreateOrderRequest,
    UpdateItemStatusRequest,
    UpdateOrderStatusRequest,
    UpdateSubOrderStatusRequest,
)
from ordering.audit.recorder import record_mutation
from ordering.checkout.placement import place_order
from ordering.order import mutations
from ordering.order.access import Principal, ensure_admin
from ordering.order.queries import (
    get_order,
    list_orders,
    list_seller_sub_orders,
    populate,
)

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201)
async def create_order(body: CreateOrderRequest, principal: Principal = Depends(get_principal)) -> dict:
    """Reserve stock for every item and create the order, all or nothing."""
    result = place_order(
        principal,
        billing=body.billing.model_dump(),
        sub_orders=[sub_order.to_domain() for sub_order in body.sub_orders],
    )
    record_mutation(principal.user_id, result, metadata={"operation": "placeOrder"})
    return populate(result.order)


@order_router.get("")
async def list_visible_orders(principal: Principal = Depends(get_principal)) -> list[dict]:
    return list_orders(principal)


@order_router.get("/seller/sub-orders")
async def list_own_sub_orders(seller_id: str | None = None, principal: Principal = Depends(get_principal)) -> list:
    """Orders containing the caller's sub-orders, pruned to those sub-orders.

    Admins may look at any seller through ``?seller_id=``.
    """
    if seller_id and seller_id != principal.user_id:
        ensure_admin(principal)
        return list_seller_sub_orders(seller_id)
    if not principal.seller and not principal.admin:
        ensure_admin(principal)
    return list_seller_sub_orders(principal.user_id)


@order_router.get("/{order_id}")
async def get_order_by_id(order_id: str, principal: Principal = Depends(get_principal)) -> dict:
    return get_order(order_id, principal)


@order_router.patch("/{order_id}/status")
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(get_principal),
) -> dict:
    """Admin override of the order status; ``null`` hands it back to the derivation."""
    result = mutations.update_order_status(principal, order_id, body.status)
    record_mutation(principal.user_id, result, metadata={"operation": "updateOrderStatus"})
    return populate(result.order)


@order_router.patch("/{order_id}/sub-orders/{sub_order_id}/status")
async def update_sub_order_status(
    order_id: str,
    sub_order_id: str,
    body: UpdateSubOrderStatusRequest,
    principal: Principal = Depends(get_principal),
) -> dict:
    result = mutations.update_sub_order_status(
        principal,
        order_id,
        sub_order_id,
        status=body.status,
        item_status=body.item_status,
    )
    record_mutation(
        principal.user_id,
        result,
        metadata={"operation": "updateSubOrderStatus", "sub_order_id": sub_order_id},
    )
    return populate(result.order)


@order_router.patch("/{order_id}/sub-orders/{sub_order_id}/items/{item_id}/status")
async def update_item_status(
    order_id: str,
    sub_order_id: str,
    item_id: str,
    body: UpdateItemStatusRequest,
    principal: Principal = Depends(get_principal),
) -> dict:
    result = mutations.update_item_status(principal, order_id, sub_order_id, item_id, body.item_status)
    record_mutation(
        principal.user_id,
        result,
        metadata={"operation": "updateItemStatus", "sub_order_id": sub_order_id, "item_id": item_id},
    )
    return populate(result.order)


@order_router.delete("/{order_id}", status_code=204)
async def delete_order(order_id: str, principal: Principal = Depends(get_principal)) -> Response:
    result = mutations.delete_order(principal, order_id)
    record_mutation(principal.user_id, result, metadata={"operation": "deleteOrder"})
    return Response(status_code=204)
