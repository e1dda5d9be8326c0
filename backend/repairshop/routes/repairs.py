# Overview: Flask API routes for repairs; parses input and returns JSON responses.

"""
Repair Routes

SECURITY: All routes require a signed-in user.
- Staff see and act on repairs of their own store only
- Owners see every store; new repairs default to the first store

Intake registers unknown customers on the fly (matched by phone).
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_user
from ..extensions import get_data_store
from ..services import repair_service, query_service
from ..services.access_service import default_store_id, scope_to_user, user_can_access_store
from ..services.lifecycle_service import LifecycleError, next_repair_statuses, parse_order_status
from ..validation import (
    FormPolicy,
    ValidationError,
    parse_int,
    parse_issues,
    parse_money_cents,
    validate_form,
)
from .common import outcome_error, store_forbidden


repairs_bp = Blueprint("repairs", __name__, url_prefix="/api/repairs")

REPAIR_INTAKE_POLICY = FormPolicy(
    writable_fields=frozenset({
        "store_id",
        "customer_phone",
        "customer_name",
        "customer_email",
        "phone_company",
        "phone_model",
        "imei",
        "issues",
        "bill_amount",
        "estimated_days",
        "order_status",
        "notes",
    }),
    required=frozenset({
        "customer_phone",
        "customer_name",
        "phone_company",
        "phone_model",
        "issues",
        "bill_amount",
    }),
    text_fields=frozenset({
        "store_id",
        "customer_phone",
        "customer_name",
        "customer_email",
        "phone_company",
        "phone_model",
        "imei",
        "notes",
    }),
)

REPAIR_STATUS_POLICY = FormPolicy(
    writable_fields=frozenset({"status", "notes"}),
    required=frozenset({"status"}),
    text_fields=frozenset({"notes"}),
)


def _repair_payload(repair) -> dict:
    row = repair.to_dict()
    row["next_statuses"] = [s.value for s in next_repair_statuses(repair.order_status)]
    return row


@repairs_bp.get("")
@require_user
def list_repairs_route():
    """
    Query parameters:
    - search: matches model, customer name, issue text or company
    - status: order status filter ("all" for none)
    """
    snapshot = get_data_store().snapshot()
    repairs = scope_to_user(g.current_user, snapshot.repairs)

    try:
        rows = query_service.filter_repairs(
            repairs,
            snapshot.customers,
            search=request.args.get("search"),
            status=request.args.get("status"),
        )
    except LifecycleError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"items": [_repair_payload(r) for r in rows], "count": len(rows)}), 200


@repairs_bp.get("/<repair_id>")
@require_user
def get_repair_route(repair_id: str):
    repair = repair_service.get_repair(get_data_store(), repair_id)
    if repair is None or not user_can_access_store(g.current_user, repair.store_id):
        return jsonify({"error": "Repair not found"}), 404
    return jsonify(_repair_payload(repair)), 200


@repairs_bp.post("")
@require_user
def intake_repair_route():
    """
    Take in a device for repair.

    Request body:
    {
        "customer_phone": "(555) 111-2222",  // required; looked up, created if unknown
        "customer_name": "Alice Brown",      // required
        "customer_email": "...",             // optional
        "phone_company": "Apple",            // required
        "phone_model": "iPhone 14 Pro",      // required
        "imei": "...",                       // optional
        "issues": ["Cracked screen"],        // required, at least one non-blank
        "bill_amount": "299.99",             // required, >= 0
        "estimated_days": "3",               // optional
        "order_status": "pending",           // optional
        "store_id": "store-1"                // optional (owners only)
    }
    """
    user = g.current_user
    store = get_data_store()

    try:
        form = validate_form(request.get_json(silent=True), REPAIR_INTAKE_POLICY)
        issues = parse_issues(form["issues"])
        bill_amount_cents = parse_money_cents(form["bill_amount"], "bill_amount")
        raw_days = form.get("estimated_days")
        estimated_days = parse_int(
            current_app.config["DEFAULT_ESTIMATED_DAYS"] if raw_days is None else raw_days,
            "estimated_days",
            minimum=0,
            maximum=365,
        )
        order_status = parse_order_status(form.get("order_status") or "pending")
    except (ValidationError, LifecycleError) as e:
        return jsonify({"error": str(e)}), 400

    store_id = form.get("store_id") or default_store_id(user, store.stores)
    if not user_can_access_store(user, store_id):
        return store_forbidden(store_id)

    try:
        result = repair_service.intake_repair(
            store,
            store_id=store_id,
            customer_phone=form["customer_phone"],
            customer_name=form["customer_name"],
            customer_email=form.get("customer_email"),
            phone_company=form["phone_company"],
            phone_model=form["phone_model"],
            imei=form.get("imei"),
            issues=issues,
            assigned_staff_id=user.id,
            bill_amount_cents=bill_amount_cents,
            order_status=order_status,
            estimated_days=estimated_days,
            notes=form.get("notes"),
        )
    except Exception:
        current_app.logger.exception("Failed to add repair")
        return jsonify({"error": "Internal server error"}), 500

    if not result.ok:
        return outcome_error(result)
    return jsonify(_repair_payload(result.record)), 201


@repairs_bp.post("/<repair_id>/status")
@require_user
def update_status_route(repair_id: str):
    """
    Request body:
    {
        "status": "delivered",  // required; "completed" is accepted for repaired
        "notes": "..."          // optional, replaces existing notes
    }

    Returns:
        200: updated repair
        400: unknown status
        404: repair not found (or in another store)
        409: transition not allowed from the current status
    """
    store = get_data_store()
    try:
        form = validate_form(request.get_json(silent=True), REPAIR_STATUS_POLICY)
        status = parse_order_status(form["status"])
    except (ValidationError, LifecycleError) as e:
        return jsonify({"error": str(e)}), 400

    repair = repair_service.get_repair(store, repair_id)
    if repair is None or not user_can_access_store(g.current_user, repair.store_id):
        return jsonify({"error": "Repair not found"}), 404

    result = repair_service.update_repair_status(store, repair_id, status, notes=form.get("notes"))
    if not result.ok:
        return outcome_error(result)
    return jsonify(_repair_payload(result.record)), 200
