# Overview: Flask API routes for customers; parses input and returns JSON responses.

"""
Customer Routes

Customers are shared across stores. Spend and repair aggregates only count
repairs the acting user can see.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_user
from ..extensions import get_data_store
from ..services import customer_service, query_service
from ..services.access_service import scope_to_user
from ..validation import FormPolicy, ValidationError, validate_form
from .common import outcome_error


customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")

CUSTOMER_POLICY = FormPolicy(
    writable_fields=frozenset({"name", "phone", "email", "address"}),
    required=frozenset({"name", "phone"}),
    text_fields=frozenset({"name", "phone", "email", "address"}),
)


@customers_bp.get("")
@require_user
def list_customers_route():
    """
    Query parameters:
    - search: matches name, phone or email (case-insensitive)

    Returns:
        {items: CustomerSummary[], count: int}
    """
    snapshot = get_data_store().snapshot()
    repairs = scope_to_user(g.current_user, snapshot.repairs)
    customers = query_service.filter_customers(snapshot.customers, search=request.args.get("search"))

    return jsonify({
        "items": [query_service.customer_summary(c, repairs) for c in customers],
        "count": len(customers),
    }), 200


@customers_bp.post("")
@require_user
def create_customer_route():
    try:
        form = validate_form(request.get_json(silent=True), CUSTOMER_POLICY)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        result = customer_service.add_customer(
            get_data_store(),
            name=form["name"],
            phone=form["phone"],
            email=form.get("email"),
            address=form.get("address"),
        )
    except Exception:
        current_app.logger.exception("Failed to add customer")
        return jsonify({"error": "Internal server error"}), 500

    if not result.ok:
        return outcome_error(result)
    return jsonify(result.record.to_dict()), 201


@customers_bp.get("/by-phone/<path:phone>")
@require_user
def find_by_phone_route(phone: str):
    """Exact phone lookup used by the repair intake form to pre-fill customer details."""
    customer = customer_service.find_customer_by_phone(get_data_store(), phone)
    if customer is None:
        return jsonify({"error": "Customer not found"}), 404
    return jsonify(customer.to_dict()), 200


@customers_bp.get("/<customer_id>")
@require_user
def get_customer_route(customer_id: str):
    store = get_data_store()
    customer = customer_service.get_customer(store, customer_id)
    if customer is None:
        return jsonify({"error": "Customer not found"}), 404
    repairs = scope_to_user(g.current_user, store.repairs)
    return jsonify(query_service.customer_summary(customer, repairs)), 200
