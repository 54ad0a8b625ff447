"""BDD tests for status precedence."""

from ordering.order import mutations
from ordering.order.access import Principal
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import parsers, scenarios, when

scenarios("features/status_precedence.feature")

ADMIN = Principal(user_id="admin-001", role="admin")
_POSITIONS = {"first": 0, "second": 1}


def _current(order):
    return current_domain.repository_for(Order).get(order.id)


def _sub_order_of(order, seller_id):
    return next(so for so in order.sub_orders if so.seller_id == seller_id)


def _seller(seller_id):
    return Principal(user_id=seller_id, role="seller")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.parse('"{seller_id}" sets the {position} item to "{status}"'))
def _(order, seller_id, position, status):
    current = _current(order)
    sub_order = _sub_order_of(current, seller_id)
    item = current.items_of(sub_order.id)[_POSITIONS[position]]
    mutations.update_item_status(_seller(seller_id), order.id, sub_order.id, item.id, status)


@when(parsers.parse('"{seller_id}" sets every item to "{status}"'))
def _(order, seller_id, status):
    current = _current(order)
    sub_order = _sub_order_of(current, seller_id)
    for item in current.items_of(sub_order.id):
        mutations.update_item_status(_seller(seller_id), order.id, sub_order.id, item.id, status)


@when(parsers.parse('an admin overrides the order status to "{status}"'))
def _(order, status):
    mutations.update_order_status(ADMIN, order.id, status)


@when("an admin clears the order status override")
def _(order):
    mutations.update_order_status(ADMIN, order.id, None)
