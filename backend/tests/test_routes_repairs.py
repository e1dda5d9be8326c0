"""
Repair route tests: listing, intake and status changes over HTTP.
"""

import pytest


INTAKE = {
    "customer_phone": "(555) 222-9999",
    "customer_name": "Erin Park",
    "phone_company": "OnePlus",
    "phone_model": "OnePlus 11",
    "issues": ["Cracked screen", "Loose charging port"],
    "bill_amount": "149.50",
}


# =============================================================================
# LISTING
# =============================================================================


class TestListRepairs:
    def test_owner_sees_all(self, client, owner_headers):
        body = client.get("/api/repairs", headers=owner_headers).get_json()
        assert body["count"] == 2

    def test_staff_scoped(self, client, staff_headers):
        body = client.get("/api/repairs", headers=staff_headers).get_json()
        assert [r["id"] for r in body["items"]] == ["repair-1"]

    def test_status_and_coarse_status(self, client, owner_headers):
        body = client.get("/api/repairs?status=completed", headers=owner_headers).get_json()
        row = body["items"][0]
        assert row["id"] == "repair-2"
        assert row["order_status"] == "repaired"
        assert row["status"] == "completed"
        assert row["next_statuses"] == ["delivered"]

    def test_search(self, client, owner_headers):
        body = client.get("/api/repairs?search=alice", headers=owner_headers).get_json()
        assert [r["id"] for r in body["items"]] == ["repair-1"]

    def test_invalid_status_filter(self, client, owner_headers):
        resp = client.get("/api/repairs?status=lost", headers=owner_headers)
        assert resp.status_code == 400

    def test_get_other_store_is_404(self, client, mall_staff_headers):
        assert client.get("/api/repairs/repair-1", headers=mall_staff_headers).status_code == 404
        assert client.get("/api/repairs/repair-2", headers=mall_staff_headers).status_code == 200


# =============================================================================
# INTAKE
# =============================================================================


class TestIntake:
    def test_staff_intake_lands_in_own_store(self, client, mall_staff_headers, store):
        resp = client.post("/api/repairs", json=INTAKE, headers=mall_staff_headers)

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["id"] == "repair-3"
        assert body["store_id"] == "store-2"
        assert body["bill_amount_cents"] == 14950
        assert body["assigned_staff_id"] == "3"
        assert body["order_status"] == "pending"
        assert store.customers[0].name == "Erin Park"

    def test_owner_can_pick_store(self, client, owner_headers):
        resp = client.post("/api/repairs", json={**INTAKE, "store_id": "store-2"}, headers=owner_headers)
        assert resp.get_json()["store_id"] == "store-2"

    def test_staff_cannot_target_other_store(self, client, staff_headers, store):
        resp = client.post("/api/repairs", json={**INTAKE, "store_id": "store-2"}, headers=staff_headers)
        assert resp.status_code == 403
        assert len(store.repairs) == 2

    def test_unknown_store(self, client, owner_headers):
        resp = client.post("/api/repairs", json={**INTAKE, "store_id": "store-9"}, headers=owner_headers)
        assert resp.status_code == 404

    @pytest.mark.parametrize(
        "override",
        [
            {"bill_amount": "lots"},
            {"bill_amount": "-5"},
            {"bill_amount": "1e30"},
            {"customer_name": {"first": "Erin"}},
            {"phone_model": ["OnePlus 11"]},
            {"issues": []},
            {"customer_name": " "},
            {"order_status": "finished"},
            {"estimated_days": "2.5"},
            {"technician": "Bob"},
        ],
    )
    def test_bad_input(self, client, owner_headers, store, override):
        resp = client.post("/api/repairs", json={**INTAKE, **override}, headers=owner_headers)
        assert resp.status_code == 400
        assert len(store.repairs) == 2
        assert len(store.customers) == 2

    def test_numeric_customer_name_is_searchable(self, client, owner_headers):
        payload = {**INTAKE, "customer_name": 42, "customer_phone": 5550001}
        resp = client.post("/api/repairs", json=payload, headers=owner_headers)
        assert resp.status_code == 201
        assert resp.get_json()["customer_phone"] == "5550001"

        resp = client.get("/api/repairs?search=zzz", headers=owner_headers)
        assert resp.status_code == 200
        assert resp.get_json()["count"] == 0
        resp = client.get("/api/repairs?search=42", headers=owner_headers)
        assert [r["id"] for r in resp.get_json()["items"]] == ["repair-3"]


# =============================================================================
# STATUS CHANGES
# =============================================================================


class TestStatus:
    def test_deliver(self, client, owner_headers):
        resp = client.post(
            "/api/repairs/repair-2/status",
            json={"status": "delivered", "notes": "Picked up"},
            headers=owner_headers,
        )
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["order_status"] == "delivered"
        assert body["delivery_date"] is not None
        assert body["notes"] == "Picked up"
        assert body["next_statuses"] == []

    def test_illegal_transition(self, client, owner_headers):
        resp = client.post("/api/repairs/repair-2/status", json={"status": "pending"}, headers=owner_headers)
        assert resp.status_code == 409
        body = resp.get_json()
        assert body["outcome"] == "illegal_transition"
        assert body["record"]["order_status"] == "repaired"

    def test_unknown_status(self, client, owner_headers):
        resp = client.post("/api/repairs/repair-1/status", json={"status": "fixed"}, headers=owner_headers)
        assert resp.status_code == 400

    def test_unknown_repair(self, client, owner_headers):
        resp = client.post("/api/repairs/repair-99/status", json={"status": "repaired"}, headers=owner_headers)
        assert resp.status_code == 404

    def test_staff_cannot_touch_other_store(self, client, staff_headers, store):
        resp = client.post("/api/repairs/repair-2/status", json={"status": "delivered"}, headers=staff_headers)
        assert resp.status_code == 404
        assert store.get("repairs", "repair-2").delivery_date is None
