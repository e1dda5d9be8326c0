# Overview: Repair intake and status operations on the in-memory data store.

"""
Repair Service

INTAKE:
- add_repair() records a repair for an existing store and customer. The
  customer is referenced by phone and must already exist; the new repair id
  is appended to that customer's repair history.
- intake_repair() is the counter workflow: look the customer up by phone,
  register them if unknown, then add the repair.

STATUS:
- update_repair_status() moves order_status along the transition table in
  lifecycle_service. Entering repaired stamps completed_date, entering
  delivered stamps delivery_date. received_date is never touched.

New repairs are prepended so the newest intake is listed first.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from ..datastore import DataStore, MutationResult, Outcome
from ..models import OrderStatus, Repair
from ..time_utils import days_from_now, utcnow
from . import customer_service
from .lifecycle_service import can_transition_repair, parse_order_status


logger = logging.getLogger(__name__)


def get_repair(store: DataStore, repair_id: str) -> Repair | None:
    return store.get("repairs", repair_id)


def add_repair(
    store: DataStore,
    *,
    store_id: str,
    customer_phone: str,
    phone_company: str,
    phone_model: str,
    issues: Iterable[str],
    assigned_staff_id: str,
    bill_amount_cents: int,
    order_status: OrderStatus = OrderStatus.PENDING,
    imei: str | None = None,
    received_date: datetime | None = None,
    estimated_completion: datetime | None = None,
    notes: str | None = None,
) -> MutationResult:
    """
    Record a new repair (prepended) and link it to its customer.

    Returns:
        MutationResult with the created Repair, or Outcome.NOT_FOUND when
        the store or the customer phone is unknown (nothing is written).
    """
    def _op():
        if store.get("stores", store_id) is None:
            return MutationResult.not_found(f"Store {store_id} not found")
        if customer_service.find_customer_by_phone(store, customer_phone) is None:
            return MutationResult.not_found(f"Customer with phone {customer_phone} not found")

        repair = Repair(
            id=store.next_id("repair"),
            store_id=store_id,
            customer_phone=customer_phone,
            phone_company=phone_company,
            phone_model=phone_model,
            imei=imei or None,
            issues=tuple(issues),
            order_status=order_status,
            received_date=received_date or utcnow(),
            assigned_staff_id=assigned_staff_id,
            bill_amount_cents=bill_amount_cents,
            estimated_completion=estimated_completion,
            notes=notes or None,
        )
        if order_status is OrderStatus.REPAIRED:
            repair = replace(repair, completed_date=repair.received_date)
        elif order_status is OrderStatus.DELIVERED:
            repair = replace(repair, completed_date=repair.received_date, delivery_date=repair.received_date)

        store.prepend("repairs", repair)
        customer_service.record_repair(store, phone=customer_phone, repair_id=repair.id)
        logger.info("repair %s added for store %s", repair.id, store_id)
        return MutationResult.success(repair)

    return store.atomic(_op)


def intake_repair(
    store: DataStore,
    *,
    store_id: str,
    customer_phone: str,
    customer_name: str,
    phone_company: str,
    phone_model: str,
    issues: Iterable[str],
    assigned_staff_id: str,
    bill_amount_cents: int,
    customer_email: str | None = None,
    imei: str | None = None,
    order_status: OrderStatus = OrderStatus.PENDING,
    estimated_days: int = 3,
    notes: str | None = None,
) -> MutationResult:
    """
    Take a device in at the counter.

    An unknown phone number registers a new customer first. A known phone
    keeps the stored customer details; the submitted name/email are only
    used for new customers.
    """
    def _op():
        if store.get("stores", store_id) is None:
            return MutationResult.not_found(f"Store {store_id} not found")

        if customer_service.find_customer_by_phone(store, customer_phone) is None:
            customer_service.add_customer(
                store,
                name=customer_name,
                phone=customer_phone,
                email=customer_email,
            )

        now = utcnow()
        return add_repair(
            store,
            store_id=store_id,
            customer_phone=customer_phone,
            phone_company=phone_company,
            phone_model=phone_model,
            issues=issues,
            assigned_staff_id=assigned_staff_id,
            bill_amount_cents=bill_amount_cents,
            order_status=order_status,
            imei=imei,
            received_date=now,
            estimated_completion=days_from_now(estimated_days, now=now),
            notes=notes,
        )

    return store.atomic(_op)


def update_repair_status(
    store: DataStore,
    repair_id: str,
    new_status: OrderStatus | str,
    notes: str | None = None,
) -> MutationResult:
    """
    Move a repair to `new_status`, optionally replacing its notes.

    Returns:
        MutationResult with the updated Repair; Outcome.NOT_FOUND for an
        unknown id; Outcome.ILLEGAL_TRANSITION (with the unchanged repair)
        when the table forbids the move.

    Raises:
        LifecycleError: if `new_status` is not a repair status at all
    """
    status = parse_order_status(new_status)

    def _op():
        repair = get_repair(store, repair_id)
        if repair is None:
            return MutationResult.not_found(f"Repair {repair_id} not found")

        if not can_transition_repair(repair.order_status, status):
            return MutationResult(
                Outcome.ILLEGAL_TRANSITION,
                repair,
                f"Cannot move repair from {repair.order_status.value} to {status.value}",
            )

        changes: dict = {}
        if status is not repair.order_status:
            changes["order_status"] = status
            if status is OrderStatus.REPAIRED:
                changes["completed_date"] = utcnow()
            elif status is OrderStatus.DELIVERED:
                changes["delivery_date"] = utcnow()
        if notes:
            changes["notes"] = notes

        if not changes:
            return MutationResult.success(repair)

        updated = replace(repair, **changes)
        store.put("repairs", updated)
        logger.info("repair %s status %s -> %s", repair_id, repair.order_status.value, status.value)
        return MutationResult.success(updated)

    return store.atomic(_op)
