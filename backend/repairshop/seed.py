# Overview: Fixed sample data loaded into every new data store.

from __future__ import annotations

from datetime import datetime

from .models import (
    Customer,
    InventoryItem,
    InventoryUpdateRequest,
    OrderStatus,
    Repair,
    Store,
    Supplier,
    User,
    ROLE_OWNER,
    ROLE_STAFF,
)
from .time_utils import utcnow


# Demo accounts offered on the login screen.
DEMO_ACCOUNTS = (
    ("owner@mobileshop.com", "Owner", "Full access to all stores and features"),
    ("staff@mobileshop.com", "Staff", "Access to Downtown store"),
    ("staff2@mobileshop.com", "Staff", "Access to Mall store"),
)


def build_sample_data(*, now: datetime | None = None) -> dict[str, tuple]:
    """
    Return the sample collections keyed by collection name.

    `now` stamps records whose original creation time is "today" (the
    pending update request); tests pass a fixed value.
    """
    now = now or utcnow()

    users = (
        User(id="1", name="Shop Owner", email="owner@mobileshop.com", role=ROLE_OWNER),
        User(id="2", name="Downtown Staff", email="staff@mobileshop.com", role=ROLE_STAFF, store_id="store-1"),
        User(id="3", name="Mall Staff", email="staff2@mobileshop.com", role=ROLE_STAFF, store_id="store-2"),
    )

    stores = (
        Store(
            id="store-1",
            name="Downtown Mobile Repair",
            location="123 Main St, Downtown",
            owner_id="1",
            phone="(555) 123-4567",
            created_at=datetime(2024, 1, 15),
        ),
        Store(
            id="store-2",
            name="Mall Mobile Center",
            location="456 Shopping Mall, Suite 12",
            owner_id="1",
            phone="(555) 987-6543",
            created_at=datetime(2024, 2, 20),
        ),
    )

    suppliers = (
        Supplier(
            id="sup-1",
            name="PartsPro Wholesale",
            phone="(555) 700-1000",
            address="12 Industrial Way",
            created_at=datetime(2024, 1, 20),
        ),
        Supplier(
            id="sup-2",
            name="Mobile Spares Direct",
            phone="(555) 700-2000",
            created_at=datetime(2024, 3, 5),
        ),
    )

    inventory = (
        InventoryItem(
            id="inv-1",
            store_id="store-1",
            name="Apple iPhone 14 Display",
            mobile_company="Apple",
            spare_part_type="Display",
            spare_part_model="iPhone 14",
            supplier_id="sup-1",
            supplier_phone="(555) 700-1000",
            quantity=15,
            reorder_level=5,
            buy_price_cents=6000,
            wholesale_price_cents=7500,
            retail_price_cents=8999,
            category="Display",
        ),
        InventoryItem(
            id="inv-2",
            store_id="store-1",
            name="Samsung Galaxy S23 Battery",
            mobile_company="Samsung",
            spare_part_type="Battery",
            spare_part_model="Galaxy S23",
            supplier_id="sup-2",
            supplier_phone="(555) 700-2000",
            quantity=8,
            reorder_level=10,
            buy_price_cents=2500,
            wholesale_price_cents=3500,
            retail_price_cents=4599,
            category="Battery",
            requested_updates=(
                InventoryUpdateRequest(
                    id="req-1",
                    requested_by="2",
                    quantity_change=-2,
                    reason="Used for repair #R001",
                    requested_at=now,
                ),
            ),
        ),
        InventoryItem(
            id="inv-3",
            store_id="store-2",
            name="Apple iPhone 13 Camera",
            mobile_company="Apple",
            spare_part_type="Camera",
            spare_part_model="iPhone 13",
            supplier_id="sup-1",
            supplier_phone="(555) 700-1000",
            quantity=3,
            reorder_level=5,
            buy_price_cents=8000,
            wholesale_price_cents=10000,
            retail_price_cents=12599,
            category="Camera",
        ),
    )

    customers = (
        Customer(
            id="cust-1",
            name="Alice Brown",
            phone="(555) 111-2222",
            email="alice@email.com",
            address="789 Oak Street",
            repair_history=("repair-1",),
            created_at=datetime(2024, 6, 1),
        ),
        Customer(
            id="cust-2",
            name="Bob Johnson",
            phone="(555) 333-4444",
            repair_history=("repair-2",),
            created_at=datetime(2024, 6, 10),
        ),
    )

    repairs = (
        Repair(
            id="repair-1",
            store_id="store-1",
            customer_phone="(555) 111-2222",
            phone_company="Apple",
            phone_model="iPhone 14 Pro",
            issues=("Cracked screen",),
            order_status=OrderStatus.IN_PROGRESS,
            received_date=datetime(2024, 6, 15),
            assigned_staff_id="2",
            bill_amount_cents=29999,
            estimated_completion=datetime(2024, 6, 18),
            notes="Waiting for customer approval on additional frame repair",
        ),
        Repair(
            id="repair-2",
            store_id="store-2",
            customer_phone="(555) 333-4444",
            phone_company="Samsung",
            phone_model="Samsung Galaxy S23",
            issues=("Battery not charging",),
            order_status=OrderStatus.REPAIRED,
            received_date=datetime(2024, 6, 12),
            completed_date=datetime(2024, 6, 14),
            assigned_staff_id="3",
            bill_amount_cents=8999,
        ),
    )

    return {
        "stores": stores,
        "suppliers": suppliers,
        "customers": customers,
        "inventory": inventory,
        "repairs": repairs,
        "users": users,
    }
