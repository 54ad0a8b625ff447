"""Access and visibility rules for orders.

| Role   | List / get                          | Item & sub-order status | Order status / delete |
|--------|-------------------------------------|-------------------------|-----------------------|
| buyer  | orders they bought                  | never                   | never                 |
| seller | orders with a sub-order they own    | their own sub-orders    | never                 |
| admin  | everything                          | everything              | everything            |

The ``is_admin`` flag grants admin rights whatever the role.
"""

from dataclasses import dataclass
from enum import Enum

from ordering.errors import Forbidden


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as supplied by the identity collaborator."""

    user_id: str
    role: str = Role.BUYER.value
    is_admin: bool = False

    @property
    def admin(self) -> bool:
        return self.is_admin or self.role == Role.ADMIN.value

    @property
    def seller(self) -> bool:
        return self.role == Role.SELLER.value


def owns_sub_order(principal: Principal, sub_order) -> bool:
    return principal.seller and str(sub_order.seller_id) == str(principal.user_id)


def can_view(principal: Principal, order) -> bool:
    if principal.admin:
        return True
    if principal.seller:
        return any(owns_sub_order(principal, so) for so in order.sub_orders)
    return str(order.buyer_id) == str(principal.user_id)


def ensure_can_view(principal: Principal, order) -> None:
    if not can_view(principal, order):
        raise Forbidden(f"Order {order.id} is not visible to {principal.user_id}")


def ensure_can_manage_sub_order(principal: Principal, sub_order) -> None:
    if principal.admin or owns_sub_order(principal, sub_order):
        return
    raise Forbidden(f"Sub-order {sub_order.id} is not managed by {principal.user_id}")


def ensure_admin(principal: Principal) -> None:
    if not principal.admin:
        raise Forbidden("Only administrators may perform this action")
