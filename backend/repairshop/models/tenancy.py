from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from repairshop.time_utils import to_utc_z


@dataclass(frozen=True)
class Store:
    """
    A physical shop location.

    Stores are created from the sample data when the data store is built
    and never change afterwards. Every inventory item and repair belongs to
    exactly one store; staff users are bound to one store as well.
    """
    id: str
    name: str
    location: str
    owner_id: str
    created_at: datetime
    phone: str | None = None

    def __repr__(self) -> str:
        return f"<Store id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "owner_id": self.owner_id,
            "phone": self.phone,
            "created_at": to_utc_z(self.created_at),
        }
