# Overview: Inventory item, quantity and update-request operations on the in-memory data store.

"""
Repair Shop Inventory Invariants (authoritative)

Quantity:
- quantity is a stored field on InventoryItem and is never negative.
- Every write clamps at zero: max(0, value). Nothing is rejected for going
  below zero, so a large negative change is silently truncated.

Update requests:
- Staff propose a signed quantity_change with a reason; the request is
  appended (oldest first) to the item's requested_updates.
- Approval applies the change (clamped) and stamps reviewer/time.
- Denial only stamps reviewer/time.
- A reviewed request cannot be reviewed again (Outcome.ALREADY_REVIEWED),
  so an approved change is applied exactly once.

Direct changes:
- update_inventory_quantity() sets an absolute quantity,
  adjust_inventory_quantity() applies a relative change. Both bypass the
  request workflow and are owner actions at the HTTP boundary.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from ..datastore import DataStore, MutationResult, Outcome
from ..models import InventoryItem, InventoryUpdateRequest, RequestStatus
from ..time_utils import utcnow
from . import supplier_service
from .lifecycle_service import can_transition_request


logger = logging.getLogger(__name__)


def clamp_quantity(value: int) -> int:
    return max(0, value)


def default_item_name(mobile_company: str, spare_part_model: str | None, spare_part_type: str) -> str:
    """Name like 'Apple iPhone 14 Display', used when none is given."""
    parts = [mobile_company, spare_part_model, spare_part_type]
    return " ".join(p.strip() for p in parts if p and p.strip())


def get_inventory_item(store: DataStore, item_id: str) -> InventoryItem | None:
    return store.get("inventory", item_id)


def add_inventory_item(
    store: DataStore,
    *,
    store_id: str,
    mobile_company: str,
    spare_part_type: str,
    quantity: int,
    reorder_level: int,
    buy_price_cents: int,
    retail_price_cents: int,
    wholesale_price_cents: int = 0,
    spare_part_model: str | None = None,
    name: str | None = None,
    category: str | None = None,
    supplier_id: str | None = None,
    purchase_date: datetime | None = None,
) -> MutationResult:
    """
    Add a stocked part (prepended).

    The item name defaults to "<company> <model> <part type>" and the
    category to the part type. When a supplier is given, its phone is
    copied onto the item.

    Returns:
        MutationResult with the created item, or Outcome.NOT_FOUND for an
        unknown store or supplier.
    """
    def _op():
        if store.get("stores", store_id) is None:
            return MutationResult.not_found(f"Store {store_id} not found")

        supplier_phone = None
        if supplier_id:
            supplier = supplier_service.get_supplier(store, supplier_id)
            if supplier is None:
                return MutationResult.not_found(f"Supplier {supplier_id} not found")
            supplier_phone = supplier.phone

        item = InventoryItem(
            id=store.next_id("inv"),
            store_id=store_id,
            name=name or default_item_name(mobile_company, spare_part_model, spare_part_type),
            mobile_company=mobile_company,
            spare_part_type=spare_part_type,
            spare_part_model=spare_part_model or None,
            supplier_id=supplier_id or None,
            supplier_phone=supplier_phone,
            purchase_date=purchase_date or utcnow(),
            quantity=clamp_quantity(quantity),
            reorder_level=reorder_level,
            buy_price_cents=buy_price_cents,
            wholesale_price_cents=wholesale_price_cents,
            retail_price_cents=retail_price_cents,
            category=category or spare_part_type,
            requested_updates=(),
        )
        store.prepend("inventory", item)
        logger.info("inventory item %s added to store %s", item.id, store_id)
        return MutationResult.success(item)

    return store.atomic(_op)


def update_inventory_quantity(store: DataStore, item_id: str, new_quantity: int) -> MutationResult:
    """Set an item's quantity, clamped at zero."""
    def _op():
        item = get_inventory_item(store, item_id)
        if item is None:
            return MutationResult.not_found(f"Inventory item {item_id} not found")

        updated = replace(item, quantity=clamp_quantity(new_quantity))
        store.put("inventory", updated)
        logger.info("inventory item %s quantity %s -> %s", item_id, item.quantity, updated.quantity)
        return MutationResult.success(updated)

    return store.atomic(_op)


def adjust_inventory_quantity(store: DataStore, item_id: str, change: int) -> MutationResult:
    """Apply a relative change to an item's quantity, clamped at zero."""
    def _op():
        item = get_inventory_item(store, item_id)
        if item is None:
            return MutationResult.not_found(f"Inventory item {item_id} not found")
        return update_inventory_quantity(store, item_id, item.quantity + change)

    return store.atomic(_op)


def add_inventory_update_request(
    store: DataStore,
    item_id: str,
    *,
    requested_by: str,
    quantity_change: int,
    reason: str,
    requested_at: datetime | None = None,
) -> MutationResult:
    """
    Append a pending update request to an item.

    Returns:
        MutationResult whose record is the new InventoryUpdateRequest, or
        Outcome.NOT_FOUND for an unknown item.
    """
    def _op():
        item = get_inventory_item(store, item_id)
        if item is None:
            return MutationResult.not_found(f"Inventory item {item_id} not found")

        request = InventoryUpdateRequest(
            id=store.next_id("req"),
            requested_by=requested_by,
            quantity_change=quantity_change,
            reason=reason,
            status=RequestStatus.PENDING,
            requested_at=requested_at or utcnow(),
        )
        store.put("inventory", replace(item, requested_updates=item.requested_updates + (request,)))
        logger.info("update request %s (%+d) filed on item %s", request.id, quantity_change, item_id)
        return MutationResult.success(request)

    return store.atomic(_op)


def _review_request(
    store: DataStore,
    item_id: str,
    request_id: str,
    *,
    reviewer_id: str,
    decision: RequestStatus,
) -> MutationResult:
    item = get_inventory_item(store, item_id)
    if item is None:
        return MutationResult.not_found(f"Inventory item {item_id} not found")

    request = item.find_request(request_id)
    if request is None:
        return MutationResult.not_found(f"Update request {request_id} not found on item {item_id}")

    if not can_transition_request(request.status, decision):
        return MutationResult(
            Outcome.ALREADY_REVIEWED,
            request,
            f"Update request {request_id} is already {request.status.value}",
        )

    reviewed = replace(request, status=decision, reviewed_by=reviewer_id, reviewed_at=utcnow())
    requests = tuple(reviewed if r.id == request_id else r for r in item.requested_updates)

    quantity = item.quantity
    if decision is RequestStatus.APPROVED:
        quantity = clamp_quantity(item.quantity + request.quantity_change)

    store.put("inventory", replace(item, quantity=quantity, requested_updates=requests))
    logger.info(
        "update request %s on item %s %s by %s (quantity %s -> %s)",
        request_id, item_id, decision.value, reviewer_id, item.quantity, quantity,
    )
    return MutationResult.success(reviewed)


def approve_inventory_request(
    store: DataStore,
    item_id: str,
    request_id: str,
    *,
    reviewer_id: str,
) -> MutationResult:
    """Approve a pending request and apply its change to the item (clamped at zero)."""
    return store.atomic(lambda: _review_request(
        store, item_id, request_id, reviewer_id=reviewer_id, decision=RequestStatus.APPROVED,
    ))


def deny_inventory_request(
    store: DataStore,
    item_id: str,
    request_id: str,
    *,
    reviewer_id: str,
) -> MutationResult:
    """Deny a pending request. The item's quantity is not touched."""
    return store.atomic(lambda: _review_request(
        store, item_id, request_id, reviewer_id=reviewer_id, decision=RequestStatus.DENIED,
    ))
