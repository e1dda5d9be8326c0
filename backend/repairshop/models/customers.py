from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from repairshop.time_utils import to_utc_z


@dataclass(frozen=True)
class Customer:
    """
    Repair-shop customer.

    The phone number is the primary identity (repairs reference customers
    by phone); `id` is a secondary handle. Customers are created on their
    first repair intake or explicitly, and are never deleted.

    repair_history holds repair ids in intake order.
    """
    id: str
    name: str
    phone: str
    created_at: datetime
    email: str | None = None
    address: str | None = None
    repair_history: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"<Customer id={self.id} phone={self.phone!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "repair_history": list(self.repair_history),
            "created_at": to_utc_z(self.created_at),
        }
