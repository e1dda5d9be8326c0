"""
Query helper tests: search, filters, role scoping and aggregates.
"""

import pytest

from repairshop.models import OrderStatus
from repairshop.services import query_service, repair_service
from repairshop.services.access_service import (
    default_store_id,
    scope_stores,
    scope_to_user,
    user_can_access_store,
)
from repairshop.services.lifecycle_service import LifecycleError


def _user(store, user_id):
    return store.get("users", user_id)


# =============================================================================
# ROLE SCOPING
# =============================================================================


class TestScoping:
    def test_owner_sees_everything(self, store):
        owner = _user(store, "1")
        assert scope_to_user(owner, store.repairs) == list(store.repairs)
        assert [s.id for s in scope_stores(owner, store.stores)] == ["store-1", "store-2"]

    def test_staff_sees_own_store_in_order(self, store):
        repair_service.intake_repair(
            store,
            store_id="store-1",
            customer_phone="(555) 333-4444",
            customer_name="Bob Johnson",
            phone_company="Apple",
            phone_model="iPhone 15",
            issues=["Face ID"],
            assigned_staff_id="2",
            bill_amount_cents=1,
        )
        staff = _user(store, "2")
        scoped = scope_to_user(staff, store.repairs)

        assert [r.id for r in scoped] == ["repair-3", "repair-1"]
        assert all(r.store_id == "store-1" for r in scoped)

    def test_staff_store_checks(self, store):
        staff = _user(store, "3")
        assert user_can_access_store(staff, "store-2")
        assert not user_can_access_store(staff, "store-1")
        assert not user_can_access_store(staff, None)
        assert [s.id for s in scope_stores(staff, store.stores)] == ["store-2"]

    def test_default_store(self, store):
        assert default_store_id(_user(store, "1"), store.stores) == "store-1"
        assert default_store_id(_user(store, "3"), store.stores) == "store-2"


# =============================================================================
# REPAIRS
# =============================================================================


class TestRepairFilters:
    @pytest.mark.parametrize(
        "term,expected",
        [
            ("", ["repair-1", "repair-2"]),
            ("IPHONE", ["repair-1"]),
            ("bob", ["repair-2"]),
            ("charging", ["repair-2"]),
            ("samsung", ["repair-2"]),
            ("nokia", []),
        ],
    )
    def test_search(self, store, term, expected):
        rows = query_service.filter_repairs(store.repairs, store.customers, search=term)
        assert [r.id for r in rows] == expected

    def test_status_filter(self, store):
        rows = query_service.filter_repairs(store.repairs, store.customers, status="completed")
        assert [r.id for r in rows] == ["repair-2"]

    def test_status_all(self, store):
        rows = query_service.filter_repairs(store.repairs, store.customers, status="all")
        assert len(rows) == 2

    def test_invalid_status(self, store):
        with pytest.raises(LifecycleError):
            query_service.filter_repairs(store.repairs, store.customers, status="lost")

    def test_recent_activity(self, store):
        rows = query_service.recent_activity(store.repairs, store.customers, limit=1)
        assert len(rows) == 1
        assert rows[0]["id"] == "repair-1"
        assert rows[0]["customer_name"] == "Alice Brown"


# =============================================================================
# INVENTORY
# =============================================================================


class TestInventoryFilters:
    def test_low_stock_is_inclusive(self, store):
        ids = [i.id for i in query_service.low_stock_items(store.inventory)]
        assert ids == ["inv-2", "inv-3"]

    def test_reorder_level_boundary(self, store):
        from repairshop.services import inventory_service

        inventory_service.update_inventory_quantity(store, "inv-1", 5)
        assert store.get("inventory", "inv-1").is_low_stock

    def test_company_and_supplier(self, store):
        rows = query_service.filter_inventory(store.inventory, company="Apple", supplier_id="sup-1")
        assert [i.id for i in rows] == ["inv-1", "inv-3"]
        rows = query_service.filter_inventory(store.inventory, company="all", supplier_id="sup-2")
        assert [i.id for i in rows] == ["inv-2"]

    def test_search_matches_part_type(self, store):
        rows = query_service.filter_inventory(store.inventory, search="camera")
        assert [i.id for i in rows] == ["inv-3"]

    def test_low_stock_only(self, store):
        rows = query_service.filter_inventory(store.inventory, company="Apple", low_stock_only=True)
        assert [i.id for i in rows] == ["inv-3"]

    def test_filter_options(self, store):
        options = query_service.inventory_filter_options(store.inventory, store.suppliers)
        assert options["companies"] == ["Apple", "Samsung"]
        assert [s["id"] for s in options["suppliers"]] == ["sup-1", "sup-2"]

    def test_pending_requests(self, store):
        rows = query_service.pending_requests(store.inventory)
        assert len(rows) == 1
        assert rows[0]["id"] == "req-1"
        assert rows[0]["item_id"] == "inv-2"
        assert rows[0]["item_name"] == "Samsung Galaxy S23 Battery"


# =============================================================================
# CUSTOMERS & DASHBOARD
# =============================================================================


class TestCustomerAggregates:
    def test_summary(self, store):
        alice = store.get("customers", "cust-1")
        summary = query_service.customer_summary(alice, store.repairs)
        assert summary["repair_count"] == 1
        assert summary["total_spent_cents"] == 29999
        assert summary["last_repair_date"] == "2024-06-15T00:00:00Z"

    def test_totals_use_phone_match(self, store):
        bob = store.get("customers", "cust-2")
        assert query_service.customer_total_spent_cents(bob, store.repairs) == 8999
        assert query_service.customer_last_repair(bob, store.repairs).id == "repair-2"

    def test_summary_agrees_with_helpers(self, store):
        bob = store.get("customers", "cust-2")
        summary = query_service.customer_summary(bob, store.repairs)
        assert summary["total_spent_cents"] == query_service.customer_total_spent_cents(bob, store.repairs)
        assert summary["recent_repairs"][0]["id"] == query_service.customer_last_repair(bob, store.repairs).id

    def test_customer_without_repairs(self, store):
        alice = store.get("customers", "cust-1")
        assert query_service.customer_last_repair(alice, []) is None
        assert query_service.customer_summary(alice, [])["last_repair_date"] is None

    def test_filter_customers(self, store):
        assert [c.id for c in query_service.filter_customers(store.customers, search="alice@")] == ["cust-1"]


class TestDashboard:
    def test_owner_stats(self, store):
        stats = query_service.dashboard_stats(store.snapshot(), _user(store, "1"))
        assert stats["active_repairs"] == {"value": 1, "total": 2}
        assert stats["low_stock_items"] == {"value": 2, "total": 3}
        assert stats["total_customers"]["value"] == 2
        assert stats["pending_delivery"] == {"value": 1, "total": 2}

    def test_staff_stats_scoped(self, store):
        stats = query_service.dashboard_stats(store.snapshot(), _user(store, "3"))
        assert stats["active_repairs"] == {"value": 0, "total": 1}
        assert stats["low_stock_items"] == {"value": 1, "total": 1}
        assert stats["pending_delivery"]["value"] == 1

    def test_cancelled_is_neither_active_nor_awaiting(self, store):
        repair_service.update_repair_status(store, "repair-1", OrderStatus.CANCELLED)
        stats = query_service.dashboard_stats(store.snapshot(), _user(store, "1"))
        assert stats["active_repairs"]["value"] == 0
        assert stats["pending_delivery"]["value"] == 1
