# Overview: Customer operations on the in-memory data store.

"""
Customer Service

IDENTITY: A customer is identified by phone number, matched as an exact
string (no normalisation). Phone numbers are unique across the shop; adding
a second customer with a known phone returns Outcome.CONFLICT together with
the existing record.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..datastore import DataStore, MutationResult, Outcome
from ..models import Customer
from ..time_utils import utcnow


logger = logging.getLogger(__name__)


def find_customer_by_phone(store: DataStore, phone: str) -> Customer | None:
    """First customer whose phone equals `phone` exactly, or None."""
    for customer in store.customers:
        if customer.phone == phone:
            return customer
    return None


def get_customer(store: DataStore, customer_id: str) -> Customer | None:
    return store.get("customers", customer_id)


def add_customer(
    store: DataStore,
    *,
    name: str,
    phone: str,
    email: str | None = None,
    address: str | None = None,
) -> MutationResult:
    """
    Register a customer with an empty repair history.

    Returns:
        MutationResult whose record is the created Customer, or the already
        registered one with Outcome.CONFLICT.
    """
    def _op():
        existing = find_customer_by_phone(store, phone)
        if existing is not None:
            return MutationResult(Outcome.CONFLICT, existing, f"Customer with phone {phone} already exists")

        customer = Customer(
            id=store.next_id("cust"),
            name=name,
            phone=phone,
            email=email or None,
            address=address or None,
            repair_history=(),
            created_at=utcnow(),
        )
        store.prepend("customers", customer)
        logger.info("customer %s added", customer.id)
        return MutationResult.success(customer)

    return store.atomic(_op)


def record_repair(store: DataStore, *, phone: str, repair_id: str) -> MutationResult:
    """Append a repair id to the history of the customer with this phone."""
    def _op():
        customer = find_customer_by_phone(store, phone)
        if customer is None:
            return MutationResult.not_found(f"Customer with phone {phone} not found")
        if repair_id in customer.repair_history:
            return MutationResult.success(customer)

        updated = replace(customer, repair_history=customer.repair_history + (repair_id,))
        store.put("customers", updated)
        return MutationResult.success(updated)

    return store.atomic(_op)
