# Overview: In-memory data store; owns every entity collection for one application instance.

"""
Repair Shop Data Store

STATE MODEL:
- Each collection (stores, suppliers, customers, inventory, repairs, users)
  is an immutable tuple of frozen dataclass records.
- A mutation never edits a tuple in place. It builds a new tuple and rebinds
  the collection (copy-on-write), then bumps `version`.
- A Snapshot taken before a mutation keeps seeing the old tuples, so a
  reader never observes a half-applied change.

OUTCOMES:
- Mutations return a MutationResult. Anything other than Outcome.OK means
  nothing was changed: same tuples, same version.

LIFETIME:
- One DataStore per Flask app (see extensions.py) or per test. There is no
  module-level instance and no persistence; state is rebuilt from seed.py.

IDS:
- "<prefix>-<n>" from a per-prefix sequence that continues after the
  highest id already present (seed data included).
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

from .models import Customer, InventoryItem, Repair, Store, Supplier, User


logger = logging.getLogger(__name__)

T = TypeVar("T")

COLLECTIONS = ("stores", "suppliers", "customers", "inventory", "repairs", "users")


class Outcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ALREADY_REVIEWED = "already_reviewed"
    ILLEGAL_TRANSITION = "illegal_transition"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class MutationResult:
    """Result of a store mutation: the outcome plus the affected record, if any."""
    outcome: Outcome
    record: Any = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls, record: Any = None) -> "MutationResult":
        return cls(Outcome.OK, record)

    @classmethod
    def not_found(cls, message: str) -> "MutationResult":
        return cls(Outcome.NOT_FOUND, None, message)


@dataclass(frozen=True)
class Snapshot:
    version: int
    stores: tuple[Store, ...]
    suppliers: tuple[Supplier, ...]
    customers: tuple[Customer, ...]
    inventory: tuple[InventoryItem, ...]
    repairs: tuple[Repair, ...]
    users: tuple[User, ...]


def _numeric_suffix(record_id: str, prefix: str) -> int | None:
    head, sep, tail = record_id.rpartition("-")
    if not sep or head != prefix or not tail.isdigit():
        return None
    return int(tail)


class DataStore:
    def __init__(
        self,
        *,
        stores: Iterable[Store] = (),
        suppliers: Iterable[Supplier] = (),
        customers: Iterable[Customer] = (),
        inventory: Iterable[InventoryItem] = (),
        repairs: Iterable[Repair] = (),
        users: Iterable[User] = (),
    ):
        self._collections: dict[str, tuple] = {
            "stores": tuple(stores),
            "suppliers": tuple(suppliers),
            "customers": tuple(customers),
            "inventory": tuple(inventory),
            "repairs": tuple(repairs),
            "users": tuple(users),
        }
        self._version = 0
        self._sequences: dict[str, int] = {}
        self._lock = threading.RLock()

    @classmethod
    def seeded(cls, *, now=None) -> "DataStore":
        """Build a store populated with the fixed sample data."""
        from .seed import build_sample_data

        return cls(**build_sample_data(now=now))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        return self._version

    @property
    def stores(self) -> tuple[Store, ...]:
        return self._collections["stores"]

    @property
    def suppliers(self) -> tuple[Supplier, ...]:
        return self._collections["suppliers"]

    @property
    def customers(self) -> tuple[Customer, ...]:
        return self._collections["customers"]

    @property
    def inventory(self) -> tuple[InventoryItem, ...]:
        return self._collections["inventory"]

    @property
    def repairs(self) -> tuple[Repair, ...]:
        return self._collections["repairs"]

    @property
    def users(self) -> tuple[User, ...]:
        return self._collections["users"]

    def snapshot(self) -> Snapshot:
        # Read under the lock so version and tuples belong to the same state.
        with self._lock:
            return Snapshot(version=self._version, **self._collections)

    def get(self, collection: str, record_id: str):
        for record in self._collections[collection]:
            if record.id == record_id:
                return record
        return None

    def counts(self) -> dict[str, int]:
        return {name: len(rows) for name, rows in self._collections.items()}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def atomic(self, func: Callable[[], T]) -> T:
        """
        Run a read-modify-rebind step while holding the writer lock.

        Flask may serve requests on several threads; readers never take the
        lock because they only ever see whole tuples.
        """
        with self._lock:
            return func()

    def replace(self, collection: str, rows: Iterable) -> None:
        """Rebind a whole collection and bump the version."""
        if collection not in self._collections:
            raise KeyError(f"unknown collection: {collection}")
        with self._lock:
            self._collections[collection] = tuple(rows)
            self._version += 1
            logger.debug("collection %s replaced (version=%s)", collection, self._version)

    def prepend(self, collection: str, record) -> None:
        self.replace(collection, (record,) + self._collections[collection])

    def put(self, collection: str, record) -> None:
        """Swap the record that has the same id for `record`."""
        self.replace(
            collection,
            (record if row.id == record.id else row for row in self._collections[collection]),
        )

    def next_id(self, prefix: str) -> str:
        with self._lock:
            if prefix not in self._sequences:
                self._sequences[prefix] = self._highest_existing(prefix)
            self._sequences[prefix] += 1
            return f"{prefix}-{self._sequences[prefix]}"

    def _highest_existing(self, prefix: str) -> int:
        highest = 0
        for rows in self._collections.values():
            for row in rows:
                ids = [row.id]
                if isinstance(row, InventoryItem):
                    ids.extend(req.id for req in row.requested_updates)
                for record_id in ids:
                    n = _numeric_suffix(record_id, prefix)
                    if n is not None and n > highest:
                        highest = n
        return highest
