"""
Inventory service tests.

Verifies:
- Quantities never go below zero
- Approve applies a request's change exactly once
- Deny never touches quantity and keeps its first stamp
"""

import pytest

from repairshop.datastore import Outcome
from repairshop.models import RequestStatus
from repairshop.services import inventory_service


def _file_request(store, item_id, change, reason="count correction"):
    result = inventory_service.add_inventory_update_request(
        store, item_id, requested_by="2", quantity_change=change, reason=reason,
    )
    assert result.ok
    return result.record


def _assert_no_negative_quantities(store):
    assert all(item.quantity >= 0 for item in store.inventory)


# =============================================================================
# DIRECT QUANTITY CHANGES
# =============================================================================


class TestQuantity:
    def test_set_quantity(self, store):
        result = inventory_service.update_inventory_quantity(store, "inv-1", 4)
        assert result.ok
        assert result.record.quantity == 4

    def test_negative_quantity_clamped(self, store):
        result = inventory_service.update_inventory_quantity(store, "inv-1", -7)
        assert result.record.quantity == 0
        _assert_no_negative_quantities(store)

    def test_adjust_relative(self, store):
        inventory_service.adjust_inventory_quantity(store, "inv-1", -1)
        inventory_service.adjust_inventory_quantity(store, "inv-1", 3)
        assert store.get("inventory", "inv-1").quantity == 17

    def test_adjust_clamped(self, store):
        result = inventory_service.adjust_inventory_quantity(store, "inv-3", -50)
        assert result.record.quantity == 0

    def test_adjust_unknown_item(self, store):
        result = inventory_service.adjust_inventory_quantity(store, "inv-999", 1)
        assert result.outcome is Outcome.NOT_FOUND


# =============================================================================
# ADDING ITEMS
# =============================================================================


class TestAddItem:
    def test_defaults(self, store):
        result = inventory_service.add_inventory_item(
            store,
            store_id="store-2",
            mobile_company="Google",
            spare_part_type="Charging Port",
            spare_part_model="Pixel 7",
            supplier_id="sup-2",
            quantity=6,
            reorder_level=2,
            buy_price_cents=1200,
            retail_price_cents=2999,
        )
        item = result.record
        assert item.id == "inv-4"
        assert item.name == "Google Pixel 7 Charging Port"
        assert item.category == "Charging Port"
        assert item.supplier_phone == "(555) 700-2000"
        assert item.requested_updates == ()
        assert store.inventory[0] is item

    def test_unknown_supplier(self, store):
        result = inventory_service.add_inventory_item(
            store,
            store_id="store-1",
            mobile_company="Apple",
            spare_part_type="Display",
            supplier_id="sup-999",
            quantity=1,
            reorder_level=1,
            buy_price_cents=1,
            retail_price_cents=2,
        )
        assert result.outcome is Outcome.NOT_FOUND
        assert len(store.inventory) == 3

    def test_unknown_store(self, store):
        result = inventory_service.add_inventory_item(
            store,
            store_id="store-9",
            mobile_company="Apple",
            spare_part_type="Display",
            quantity=1,
            reorder_level=1,
            buy_price_cents=1,
            retail_price_cents=2,
        )
        assert result.outcome is Outcome.NOT_FOUND

    def test_default_item_name_skips_blank_model(self):
        assert inventory_service.default_item_name("Apple", None, "Battery") == "Apple Battery"


# =============================================================================
# UPDATE REQUESTS
# =============================================================================


class TestUpdateRequests:
    def test_request_is_appended_pending(self, store):
        req = _file_request(store, "inv-2", 5)
        item = store.get("inventory", "inv-2")
        assert [r.id for r in item.requested_updates] == ["req-1", req.id]
        assert req.status is RequestStatus.PENDING
        assert item.quantity == 8

    def test_request_on_unknown_item(self, store):
        result = inventory_service.add_inventory_update_request(
            store, "inv-999", requested_by="2", quantity_change=1, reason="x",
        )
        assert result.outcome is Outcome.NOT_FOUND

    def test_approve_applies_delta(self, store):
        req = _file_request(store, "inv-2", -5)
        result = inventory_service.approve_inventory_request(store, "inv-2", req.id, reviewer_id="1")

        assert result.ok
        assert result.record.status is RequestStatus.APPROVED
        assert result.record.reviewed_by == "1"
        assert result.record.reviewed_at is not None
        assert store.get("inventory", "inv-2").quantity == 3

    def test_approve_clamps_at_zero(self, store):
        inventory_service.update_inventory_quantity(store, "inv-2", 3)
        req = _file_request(store, "inv-2", -5)
        inventory_service.approve_inventory_request(store, "inv-2", req.id, reviewer_id="1")
        assert store.get("inventory", "inv-2").quantity == 0
        _assert_no_negative_quantities(store)

    def test_approve_twice_applies_once(self, store):
        first = inventory_service.approve_inventory_request(store, "inv-2", "req-1", reviewer_id="1")
        second = inventory_service.approve_inventory_request(store, "inv-2", "req-1", reviewer_id="1")

        assert first.ok
        assert second.outcome is Outcome.ALREADY_REVIEWED
        assert store.get("inventory", "inv-2").quantity == 6

    def test_deny_keeps_quantity(self, store):
        result = inventory_service.deny_inventory_request(store, "inv-2", "req-1", reviewer_id="1")
        assert result.record.status is RequestStatus.DENIED
        assert store.get("inventory", "inv-2").quantity == 8

    def test_second_deny_keeps_first_stamp(self, store):
        first = inventory_service.deny_inventory_request(store, "inv-2", "req-1", reviewer_id="1")
        version = store.version
        second = inventory_service.deny_inventory_request(store, "inv-2", "req-1", reviewer_id="other")

        assert second.outcome is Outcome.ALREADY_REVIEWED
        assert second.record.reviewed_by == "1"
        assert second.record.reviewed_at == first.record.reviewed_at
        assert store.version == version

    def test_approve_after_deny_rejected(self, store):
        inventory_service.deny_inventory_request(store, "inv-2", "req-1", reviewer_id="1")
        result = inventory_service.approve_inventory_request(store, "inv-2", "req-1", reviewer_id="1")
        assert result.outcome is Outcome.ALREADY_REVIEWED
        assert store.get("inventory", "inv-2").quantity == 8

    @pytest.mark.parametrize(
        "item_id,request_id",
        [("inv-999", "req-1"), ("inv-2", "req-999"), ("inv-1", "req-1")],
    )
    def test_review_missing(self, store, item_id, request_id):
        result = inventory_service.approve_inventory_request(store, item_id, request_id, reviewer_id="1")
        assert result.outcome is Outcome.NOT_FOUND
        assert store.get("inventory", "inv-2").quantity == 8
        assert store.version == 0
