from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from repairshop.time_utils import to_utc_z


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


@dataclass(frozen=True)
class Supplier:
    """
    Spare-part supplier. Append-only: suppliers are added, never edited.
    """
    id: str
    name: str
    phone: str
    created_at: datetime
    address: str | None = None

    def __repr__(self) -> str:
        return f"<Supplier id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "address": self.address,
            "created_at": to_utc_z(self.created_at),
        }


@dataclass(frozen=True)
class InventoryUpdateRequest:
    """
    Proposed change to an item's quantity, awaiting owner review.

    LIFECYCLE: pending -> approved | denied. Reviewed requests are terminal;
    reviewed_by / reviewed_at are stamped exactly once.

    Requests are embedded in their InventoryItem and never addressed on
    their own.
    """
    id: str
    requested_by: str
    quantity_change: int
    reason: str
    requested_at: datetime
    status: RequestStatus = RequestStatus.PENDING
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "requested_by": self.requested_by,
            "quantity_change": self.quantity_change,
            "reason": self.reason,
            "status": self.status.value,
            "requested_at": to_utc_z(self.requested_at),
            "reviewed_by": self.reviewed_by,
            "reviewed_at": to_utc_z(self.reviewed_at),
        }


@dataclass(frozen=True)
class InventoryItem:
    """
    Stocked spare part at one store.

    INVARIANT: quantity >= 0. Mutations clamp at zero instead of rejecting.

    Prices are integer cents: buy (what the shop paid), wholesale and
    retail. supplier_phone is a copy of the supplier's phone taken when the
    item was added.
    """
    id: str
    store_id: str
    name: str
    quantity: int
    reorder_level: int
    category: str
    mobile_company: str | None = None
    spare_part_type: str | None = None
    spare_part_model: str | None = None
    supplier_id: str | None = None
    supplier_phone: str | None = None
    purchase_date: datetime | None = None
    buy_price_cents: int = 0
    wholesale_price_cents: int = 0
    retail_price_cents: int = 0
    requested_updates: tuple[InventoryUpdateRequest, ...] = ()

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.reorder_level

    def find_request(self, request_id: str) -> InventoryUpdateRequest | None:
        for req in self.requested_updates:
            if req.id == request_id:
                return req
        return None

    def __repr__(self) -> str:
        return f"<InventoryItem id={self.id} name={self.name!r} qty={self.quantity}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "store_id": self.store_id,
            "name": self.name,
            "mobile_company": self.mobile_company,
            "spare_part_type": self.spare_part_type,
            "spare_part_model": self.spare_part_model,
            "supplier_id": self.supplier_id,
            "supplier_phone": self.supplier_phone,
            "purchase_date": to_utc_z(self.purchase_date),
            "quantity": self.quantity,
            "reorder_level": self.reorder_level,
            "is_low_stock": self.is_low_stock,
            "buy_price_cents": self.buy_price_cents,
            "wholesale_price_cents": self.wholesale_price_cents,
            "retail_price_cents": self.retail_price_cents,
            "category": self.category,
            "requested_updates": [req.to_dict() for req in self.requested_updates],
        }
