from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from repairshop.time_utils import to_utc_z


class OrderStatus(str, Enum):
    """Canonical repair lifecycle stage."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    REPAIRED = "repaired"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class CoarseStatus(str, Enum):
    """Grouping shown on dashboards; always derived from OrderStatus."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Repair:
    """
    A device taken in for repair.

    The customer is referenced by phone number. order_status is the only
    stored status; the coarse status is computed by
    lifecycle_service.coarse_status().
    """
    id: str
    store_id: str
    customer_phone: str
    phone_company: str
    phone_model: str
    issues: tuple[str, ...]
    received_date: datetime
    assigned_staff_id: str
    bill_amount_cents: int
    order_status: OrderStatus = OrderStatus.PENDING
    imei: str | None = None
    completed_date: datetime | None = None
    delivery_date: datetime | None = None
    estimated_completion: datetime | None = None
    notes: str | None = None

    def __repr__(self) -> str:
        return f"<Repair id={self.id} model={self.phone_model!r} status={self.order_status.value}>"

    def to_dict(self) -> dict:
        # Local import: lifecycle_service imports this module.
        from repairshop.services.lifecycle_service import coarse_status

        return {
            "id": self.id,
            "store_id": self.store_id,
            "customer_phone": self.customer_phone,
            "phone_company": self.phone_company,
            "phone_model": self.phone_model,
            "imei": self.imei,
            "issues": list(self.issues),
            "status": coarse_status(self.order_status).value,
            "order_status": self.order_status.value,
            "received_date": to_utc_z(self.received_date),
            "completed_date": to_utc_z(self.completed_date),
            "delivery_date": to_utc_z(self.delivery_date),
            "assigned_staff_id": self.assigned_staff_id,
            "bill_amount_cents": self.bill_amount_cents,
            "estimated_completion": to_utc_z(self.estimated_completion),
            "notes": self.notes,
        }
