"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order queries used by the read side. All results are newest first."""

    def find_all(self) -> list[Order]:
        return self._dao.query.order_by("-created_at").all().items

    def find_by_buyer(self, buyer_id: str) -> list[Order]:
        return self._dao.query.filter(buyer_id=str(buyer_id)).order_by("-created_at").all().items

    def find_by_seller(self, seller_id: str) -> list[Order]:
        """Orders holding at least one sub-order owned by ``seller_id``."""
        return self._dao.query.filter(seller_index__contains=f"|{seller_id}|").order_by("-created_at").all().items

    def remove_order(self, order: Order) -> None:
        self._dao.delete(order)
