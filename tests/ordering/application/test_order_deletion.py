"""Application tests for the admin-only hard delete."""

import pytest
from ordering.errors import Forbidden
from ordering.order import mutations
from ordering.order.order import Order
from ordering.order.queries import get_order
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


class TestDeleteOrder:
    def test_admin_deletes_the_whole_order(self, admin, two_seller_order):
        result = mutations.delete_order(admin, two_seller_order.id)

        assert result.order is None
        assert result.after is None
        assert result.before["id"] == str(two_seller_order.id)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Order).get(two_seller_order.id)

    def test_deleted_order_disappears_from_reads(self, admin, two_seller_order):
        mutations.delete_order(admin, two_seller_order.id)

        with pytest.raises(ObjectNotFoundError):
            get_order(two_seller_order.id, admin)
        assert current_domain.repository_for(Order).find_by_seller("seller-a") == []

    @pytest.mark.parametrize("principal_fixture", ["buyer", "seller_a"])
    def test_non_admins_are_forbidden(self, request, principal_fixture, two_seller_order):
        principal = request.getfixturevalue(principal_fixture)

        with pytest.raises(Forbidden):
            mutations.delete_order(principal, two_seller_order.id)

        assert current_domain.repository_for(Order).get(two_seller_order.id)

    def test_unknown_order(self, admin, listing_store):
        with pytest.raises(ObjectNotFoundError):
            mutations.delete_order(admin, "missing")

    def test_only_the_targeted_order_is_deleted(self, admin, place):
        keep = place().order
        drop = place().order

        mutations.delete_order(admin, drop.id)

        remaining = current_domain.repository_for(Order).find_all()
        assert [str(o.id) for o in remaining] == [str(keep.id)]
