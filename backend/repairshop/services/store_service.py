from __future__ import annotations

from ..datastore import DataStore
from ..models import Store, User
from .access_service import scope_stores


def get_store(store: DataStore, store_id: str) -> Store | None:
    return store.get("stores", store_id)


def list_stores(store: DataStore, *, user: User | None = None) -> list[Store]:
    stores = sorted(store.stores, key=lambda s: s.name)
    if user is None:
        return stores
    return scope_stores(user, stores)
