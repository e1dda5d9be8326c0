# backend/repairshop/routes/inventory.py
"""
Inventory management routes.

SECURITY: All routes require a signed-in user.
- Listing, adding items and filing update requests: any user, own store only
- Setting/adjusting quantities directly: owner
- Approving/denying update requests: owner

Quantities never go below zero; see services/inventory_service.py.
"""
from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_user, require_role
from ..extensions import get_data_store
from ..services import inventory_service, query_service
from ..services.access_service import default_store_id, scope_to_user, user_can_access_store
from ..validation import (
    FormPolicy,
    ValidationError,
    parse_bool_arg,
    parse_int,
    parse_money_cents,
    parse_optional_datetime,
    validate_form,
)
from .common import outcome_error, store_forbidden


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")

INVENTORY_ITEM_POLICY = FormPolicy(
    writable_fields=frozenset({
        "store_id",
        "name",
        "mobile_company",
        "spare_part_type",
        "spare_part_model",
        "supplier_id",
        "purchase_date",
        "quantity",
        "reorder_level",
        "buy_price",
        "wholesale_price",
        "retail_price",
        "category",
    }),
    required=frozenset({
        "mobile_company",
        "spare_part_type",
        "quantity",
        "buy_price",
        "retail_price",
    }),
    text_fields=frozenset({
        "store_id",
        "name",
        "mobile_company",
        "spare_part_type",
        "spare_part_model",
        "supplier_id",
        "category",
    }),
)

QUANTITY_POLICY = FormPolicy(
    writable_fields=frozenset({"quantity"}),
    required=frozenset({"quantity"}),
)

ADJUST_POLICY = FormPolicy(
    writable_fields=frozenset({"change"}),
    required=frozenset({"change"}),
)

UPDATE_REQUEST_POLICY = FormPolicy(
    writable_fields=frozenset({"quantity_change", "reason"}),
    required=frozenset({"quantity_change", "reason"}),
    text_fields=frozenset({"reason"}),
)


def _visible_item(item_id: str):
    """The item if it exists and the acting user may see it, else None."""
    item = inventory_service.get_inventory_item(get_data_store(), item_id)
    if item is None or not user_can_access_store(g.current_user, item.store_id):
        return None
    return item


def _item_not_found(item_id: str):
    return jsonify({"error": f"Inventory item {item_id} not found"}), 404


@inventory_bp.get("")
@require_user
def list_inventory_route():
    """
    Query parameters:
    - search: matches name, company, part type or part model
    - company: exact mobile company ("all" for none)
    - supplier_id: exact supplier ("all" for none)
    - low_stock: only items at or below their reorder level
    """
    snapshot = get_data_store().snapshot()
    items = scope_to_user(g.current_user, snapshot.inventory)
    rows = query_service.filter_inventory(
        items,
        search=request.args.get("search"),
        company=request.args.get("company"),
        supplier_id=request.args.get("supplier_id"),
        low_stock_only=parse_bool_arg(request.args.get("low_stock")),
    )
    return jsonify({
        "items": [item.to_dict() for item in rows],
        "count": len(rows),
        "low_stock_count": len(query_service.low_stock_items(rows)),
    }), 200


@inventory_bp.get("/filters")
@require_user
def inventory_filters_route():
    snapshot = get_data_store().snapshot()
    items = scope_to_user(g.current_user, snapshot.inventory)
    return jsonify(query_service.inventory_filter_options(items, snapshot.suppliers)), 200


@inventory_bp.get("/requests/pending")
@require_user
def pending_requests_route():
    snapshot = get_data_store().snapshot()
    items = scope_to_user(g.current_user, snapshot.inventory)
    rows = query_service.pending_requests(items)
    return jsonify({"items": rows, "count": len(rows)}), 200


@inventory_bp.get("/<item_id>")
@require_user
def get_item_route(item_id: str):
    item = _visible_item(item_id)
    if item is None:
        return _item_not_found(item_id)
    return jsonify(item.to_dict()), 200


@inventory_bp.post("")
@require_user
def add_item_route():
    """
    Add a stocked part.

    Prices are entered as currency text ("89.99") and stored as cents.
    Name defaults to "<company> <model> <part type>", category to the part type.
    """
    user = g.current_user
    store = get_data_store()

    try:
        form = validate_form(request.get_json(silent=True), INVENTORY_ITEM_POLICY)
        quantity = parse_int(form["quantity"], "quantity", minimum=0)
        raw_reorder = form.get("reorder_level")
        reorder_level = parse_int(
            current_app.config["DEFAULT_REORDER_LEVEL"] if raw_reorder is None else raw_reorder,
            "reorder_level",
            minimum=0,
        )
        buy_price_cents = parse_money_cents(form["buy_price"], "buy_price")
        retail_price_cents = parse_money_cents(form["retail_price"], "retail_price")
        wholesale = form.get("wholesale_price")
        wholesale_price_cents = parse_money_cents(wholesale, "wholesale_price") if wholesale is not None else 0
        purchase_date = parse_optional_datetime(form.get("purchase_date"), "purchase_date")
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    store_id = form.get("store_id") or default_store_id(user, store.stores)
    if not user_can_access_store(user, store_id):
        return store_forbidden(store_id)

    result = inventory_service.add_inventory_item(
        store,
        store_id=store_id,
        name=form.get("name"),
        mobile_company=form["mobile_company"],
        spare_part_type=form["spare_part_type"],
        spare_part_model=form.get("spare_part_model"),
        supplier_id=form.get("supplier_id"),
        purchase_date=purchase_date,
        quantity=quantity,
        reorder_level=reorder_level,
        buy_price_cents=buy_price_cents,
        wholesale_price_cents=wholesale_price_cents,
        retail_price_cents=retail_price_cents,
        category=form.get("category"),
    )
    if not result.ok:
        return outcome_error(result)
    return jsonify(result.record.to_dict()), 201


@inventory_bp.put("/<item_id>/quantity")
@require_user
@require_role("owner")
def set_quantity_route(item_id: str):
    """Set an absolute quantity. Negative values are stored as 0."""
    try:
        form = validate_form(request.get_json(silent=True), QUANTITY_POLICY)
        quantity = parse_int(form["quantity"], "quantity")
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    result = inventory_service.update_inventory_quantity(get_data_store(), item_id, quantity)
    if not result.ok:
        return outcome_error(result)
    return jsonify(result.record.to_dict()), 200


@inventory_bp.post("/<item_id>/adjust")
@require_user
@require_role("owner")
def adjust_quantity_route(item_id: str):
    """Apply a relative change ({"change": -1}); the result is clamped at 0."""
    try:
        form = validate_form(request.get_json(silent=True), ADJUST_POLICY)
        change = parse_int(form["change"], "change")
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    result = inventory_service.adjust_inventory_quantity(get_data_store(), item_id, change)
    if not result.ok:
        return outcome_error(result)
    return jsonify(result.record.to_dict()), 200


@inventory_bp.post("/<item_id>/requests")
@require_user
def file_update_request_route(item_id: str):
    """
    File a quantity change for owner review.

    Request body:
    {
        "quantity_change": "-2",            // required, signed integer
        "reason": "Used for repair #R001"   // required
    }
    """
    try:
        form = validate_form(request.get_json(silent=True), UPDATE_REQUEST_POLICY)
        quantity_change = parse_int(form["quantity_change"], "quantity_change")
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    if quantity_change == 0:
        return jsonify({"error": "quantity_change must be non-zero"}), 400

    if _visible_item(item_id) is None:
        return _item_not_found(item_id)

    result = inventory_service.add_inventory_update_request(
        get_data_store(),
        item_id,
        requested_by=g.current_user.id,
        quantity_change=quantity_change,
        reason=form["reason"],
    )
    if not result.ok:
        return outcome_error(result)
    return jsonify(result.record.to_dict()), 201


@inventory_bp.post("/<item_id>/requests/<request_id>/approve")
@require_user
@require_role("owner")
def approve_request_route(item_id: str, request_id: str):
    """
    Approve a pending request and apply its change.

    Returns:
        200: {request, item}
        404: item or request not found
        409: request already reviewed
    """
    store = get_data_store()
    result = inventory_service.approve_inventory_request(
        store, item_id, request_id, reviewer_id=g.current_user.id,
    )
    if not result.ok:
        return outcome_error(result)
    item = inventory_service.get_inventory_item(store, item_id)
    return jsonify({"request": result.record.to_dict(), "item": item.to_dict()}), 200


@inventory_bp.post("/<item_id>/requests/<request_id>/deny")
@require_user
@require_role("owner")
def deny_request_route(item_id: str, request_id: str):
    store = get_data_store()
    result = inventory_service.deny_inventory_request(
        store, item_id, request_id, reviewer_id=g.current_user.id,
    )
    if not result.ok:
        return outcome_error(result)
    item = inventory_service.get_inventory_item(store, item_id)
    return jsonify({"request": result.record.to_dict(), "item": item.to_dict()}), 200
