from __future__ import annotations

from typing import Iterable, TypeVar

from ..models import Store, User


T = TypeVar("T")


def user_can_access_store(user: User, store_id: str | None) -> bool:
    if store_id is None:
        return False
    if user.is_owner:
        return True
    return user.store_id == store_id


def scope_to_user(user: User, records: Iterable[T]) -> list[T]:
    """
    Keep the records the user may see, preserving order.

    Records are matched on their `store_id`; owners get everything back
    unfiltered.
    """
    if user.is_owner:
        return list(records)
    return [r for r in records if getattr(r, "store_id", None) == user.store_id]


def scope_stores(user: User, stores: Iterable[Store]) -> list[Store]:
    if user.is_owner:
        return list(stores)
    return [s for s in stores if s.id == user.store_id]


def default_store_id(user: User, stores: Iterable[Store]) -> str | None:
    """
    Store a new record lands in when the client does not pick one.

    Staff always write to their own store; owners default to the first
    store they can see.
    """
    if not user.is_owner:
        return user.store_id
    for store in stores:
        return store.id
    return None
