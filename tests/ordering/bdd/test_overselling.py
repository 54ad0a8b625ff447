"""BDD tests for all-or-nothing stock reservation."""

from ordering.errors import InsufficientStock
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/overselling.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('listing "{listing_id}" has {quantity:d} units in stock'))
def _(listing_store, listing_id, quantity):
    assert listing_store.find_by_id(listing_id).quantity == quantity


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.parse('the buyer orders {qty:d} units of "{listing_id}" from "{seller_id}"'))
def _(place, pickup_sub_order, outcome, qty, listing_id, seller_id):
    outcome["result"] = place(pickup_sub_order(seller_id=seller_id, items=((listing_id, qty),)))


@when(
    parsers.parse(
        'the buyer orders from two sellers: {qty:d} units of "{listing_id}" from "{seller_id}" '
        'and {other_qty:d} units of "{other_listing_id}" from "{other_seller_id}"'
    )
)
def _(
    place,
    pickup_sub_order,
    third_party_sub_order,
    outcome,
    qty,
    listing_id,
    seller_id,
    other_qty,
    other_listing_id,
    other_seller_id,
):
    try:
        place(
            pickup_sub_order(seller_id=seller_id, items=((listing_id, qty),)),
            third_party_sub_order(seller_id=other_seller_id, items=((other_listing_id, other_qty),)),
        )
    except InsufficientStock as exc:
        outcome["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse("the order total is {total:f}"))
def _(outcome, total):
    assert outcome["result"].order.grand_total == total


@then(parsers.parse('listing "{listing_id}" has {quantity:d} units left'))
def _(listing_store, listing_id, quantity):
    assert listing_store.find_by_id(listing_id).quantity == quantity


@then(parsers.parse('checkout fails with "{message}"'))
def _(outcome, message):
    assert isinstance(outcome["exc"], InsufficientStock)
    assert outcome["exc"].message == message


@then("no order exists")
def _():
    assert current_domain.repository_for(Order).find_all() == []
