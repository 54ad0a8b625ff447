"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then


def _current(order):
    return current_domain.repository_for(Order).get(order.id)


def _sub_order_of(order, seller_id):
    return next(so for so in order.sub_orders if so.seller_id == seller_id)


@pytest.fixture()
def outcome():
    """Container for the result or error of the last When step."""
    return {"result": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.parse('a placed order with sellers "{first}" and "{second}"'),
    target_fixture="order",
)
def _(first, second, place, pickup_sub_order, third_party_sub_order):
    return place(
        pickup_sub_order(seller_id=first, items=(("L1", 2), ("L2", 4))),
        third_party_sub_order(seller_id=second),
    ).order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the order status is "{status}"'))
def _(order, status):
    assert _current(order).status == status


@then(parsers.parse('the sub-order of "{seller_id}" is "{status}"'))
def _(order, seller_id, status):
    assert _sub_order_of(_current(order), seller_id).status == status
