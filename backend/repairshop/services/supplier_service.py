# Overview: Supplier operations on the in-memory data store.

"""
Supplier Service

Suppliers are append-only: they can be added and listed, never edited or
removed. Inventory items keep a copy of the supplier's phone taken at the
time the item was added.
"""

from __future__ import annotations

import logging

from ..datastore import DataStore, MutationResult
from ..models import Supplier
from ..time_utils import utcnow


logger = logging.getLogger(__name__)


def add_supplier(
    store: DataStore,
    *,
    name: str,
    phone: str,
    address: str | None = None,
) -> MutationResult:
    def _op():
        supplier = Supplier(
            id=store.next_id("sup"),
            name=name,
            phone=phone,
            address=address or None,
            created_at=utcnow(),
        )
        store.prepend("suppliers", supplier)
        logger.info("supplier %s added", supplier.id)
        return MutationResult.success(supplier)

    return store.atomic(_op)


def get_supplier(store: DataStore, supplier_id: str) -> Supplier | None:
    return store.get("suppliers", supplier_id)


def list_suppliers(store: DataStore, *, search: str | None = None) -> list[Supplier]:
    term = (search or "").strip().lower()
    if not term:
        return list(store.suppliers)
    return [
        s for s in store.suppliers
        if term in s.name.lower() or term in s.phone.lower()
    ]
