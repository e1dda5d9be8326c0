# Overview: Read-time derivations over data store snapshots: search, filters and aggregates.

"""
Query Helpers

Every function here is pure: it takes tuples/lists from a Snapshot and
returns new lists or dicts, never touching the store. Callers scope the
input by role first (access_service.scope_to_user).

Search is a case-insensitive substring match; an empty or blank term
matches everything. "all" in a filter argument means no filter.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..datastore import Snapshot
from ..models import Customer, InventoryItem, OrderStatus, Repair, Supplier, User
from ..time_utils import to_utc_z
from .access_service import scope_to_user
from .lifecycle_service import is_active, is_awaiting_delivery, parse_order_status


ALL = "all"


def _term(search: str | None) -> str:
    return (search or "").strip().lower()


def matches_search(term: str, values: Iterable[str | None]) -> bool:
    if not term:
        return True
    return any(term in value.lower() for value in values if value)


def _customers_by_phone(customers: Iterable[Customer]) -> dict[str, Customer]:
    index: dict[str, Customer] = {}
    for customer in customers:
        index.setdefault(customer.phone, customer)
    return index


# =============================================================================
# REPAIRS
# =============================================================================

def filter_repairs(
    repairs: Iterable[Repair],
    customers: Iterable[Customer],
    *,
    search: str | None = None,
    status: OrderStatus | str | None = None,
) -> list[Repair]:
    """Search model, customer name, issues and company; optionally filter by order_status."""
    term = _term(search)
    by_phone = _customers_by_phone(customers)
    wanted = None if status in (None, "", ALL) else parse_order_status(status)

    result = []
    for repair in repairs:
        if wanted is not None and repair.order_status is not wanted:
            continue
        customer = by_phone.get(repair.customer_phone)
        fields = [
            repair.phone_model,
            customer.name if customer else None,
            repair.phone_company,
            *repair.issues,
        ]
        if matches_search(term, fields):
            result.append(repair)
    return result


def newest_first(repairs: Iterable[Repair]) -> list[Repair]:
    return sorted(repairs, key=lambda r: r.received_date, reverse=True)


def recent_activity(
    repairs: Iterable[Repair],
    customers: Iterable[Customer],
    *,
    limit: int = 5,
) -> list[dict]:
    """Latest repairs (by received date) with the customer's name attached."""
    by_phone = _customers_by_phone(customers)
    rows = []
    for repair in newest_first(repairs)[:max(limit, 0)]:
        customer = by_phone.get(repair.customer_phone)
        row = repair.to_dict()
        row["customer_name"] = customer.name if customer else None
        rows.append(row)
    return rows


# =============================================================================
# INVENTORY
# =============================================================================

def low_stock_items(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    return [item for item in items if item.is_low_stock]


def filter_inventory(
    items: Iterable[InventoryItem],
    *,
    search: str | None = None,
    company: str | None = None,
    supplier_id: str | None = None,
    low_stock_only: bool = False,
) -> list[InventoryItem]:
    term = _term(search)
    result = []
    for item in items:
        if company not in (None, "", ALL) and item.mobile_company != company:
            continue
        if supplier_id not in (None, "", ALL) and item.supplier_id != supplier_id:
            continue
        if low_stock_only and not item.is_low_stock:
            continue
        fields = [item.name, item.mobile_company, item.spare_part_type, item.spare_part_model]
        if matches_search(term, fields):
            result.append(item)
    return result


def inventory_filter_options(
    items: Sequence[InventoryItem],
    suppliers: Iterable[Supplier],
) -> dict:
    """Distinct companies and referenced suppliers, in first-seen order."""
    companies: list[str] = []
    supplier_ids: list[str] = []
    for item in items:
        if item.mobile_company and item.mobile_company not in companies:
            companies.append(item.mobile_company)
        if item.supplier_id and item.supplier_id not in supplier_ids:
            supplier_ids.append(item.supplier_id)

    by_id = {s.id: s for s in suppliers}
    return {
        "companies": companies,
        "suppliers": [by_id[sid].to_dict() for sid in supplier_ids if sid in by_id],
    }


def pending_requests(items: Iterable[InventoryItem]) -> list[dict]:
    """Pending update requests across items, flattened with their item id/name."""
    rows = []
    for item in items:
        for req in item.requested_updates:
            if req.is_pending:
                row = req.to_dict()
                row["item_id"] = item.id
                row["item_name"] = item.name
                rows.append(row)
    return rows


# =============================================================================
# CUSTOMERS
# =============================================================================

def filter_customers(customers: Iterable[Customer], *, search: str | None = None) -> list[Customer]:
    term = _term(search)
    return [c for c in customers if matches_search(term, [c.name, c.phone, c.email])]


def customer_repairs(customer: Customer, repairs: Iterable[Repair]) -> list[Repair]:
    """The customer's repairs, newest first."""
    return newest_first(r for r in repairs if r.customer_phone == customer.phone)


def customer_total_spent_cents(customer: Customer, repairs: Iterable[Repair]) -> int:
    return sum(r.bill_amount_cents for r in repairs if r.customer_phone == customer.phone)


def customer_last_repair(customer: Customer, repairs: Iterable[Repair]) -> Repair | None:
    own = [r for r in repairs if r.customer_phone == customer.phone]
    if not own:
        return None
    return max(own, key=lambda r: r.received_date)


def customer_summary(customer: Customer, repairs: Sequence[Repair], *, recent: int = 3) -> dict:
    own = customer_repairs(customer, repairs)
    last = customer_last_repair(customer, repairs)
    row = customer.to_dict()
    row["repair_count"] = len(own)
    row["total_spent_cents"] = customer_total_spent_cents(customer, repairs)
    row["last_repair_date"] = to_utc_z(last.received_date) if last else None
    row["recent_repairs"] = [r.to_dict() for r in own[:recent]]
    return row


# =============================================================================
# DASHBOARD
# =============================================================================

def dashboard_stats(snapshot: Snapshot, user: User) -> dict:
    """
    Headline counters for the acting user's stores.

    Customers are shop-wide and are not scoped by store.
    """
    repairs = scope_to_user(user, snapshot.repairs)
    inventory = scope_to_user(user, snapshot.inventory)
    customers = snapshot.customers

    return {
        "active_repairs": {
            "value": sum(1 for r in repairs if is_active(r.order_status)),
            "total": len(repairs),
        },
        "low_stock_items": {
            "value": len(low_stock_items(inventory)),
            "total": len(inventory),
        },
        "total_customers": {
            "value": len(customers),
            "total": len(customers),
        },
        "pending_delivery": {
            "value": sum(1 for r in repairs if is_awaiting_delivery(r.order_status)),
            "total": len(repairs),
        },
        "version": snapshot.version,
    }
