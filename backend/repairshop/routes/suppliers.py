# Overview: Flask API routes for suppliers; parses input and returns JSON responses.

"""
Supplier Routes

Suppliers are shared by all stores. Any signed-in user can list them;
adding one is an owner action.
"""

from flask import Blueprint, request, jsonify

from ..decorators import require_user, require_role
from ..extensions import get_data_store
from ..services import supplier_service
from ..validation import FormPolicy, ValidationError, validate_form


suppliers_bp = Blueprint("suppliers", __name__, url_prefix="/api/suppliers")

SUPPLIER_POLICY = FormPolicy(
    writable_fields=frozenset({"name", "phone", "address"}),
    required=frozenset({"name", "phone"}),
    text_fields=frozenset({"name", "phone", "address"}),
)


@suppliers_bp.get("")
@require_user
def list_suppliers_route():
    suppliers = supplier_service.list_suppliers(get_data_store(), search=request.args.get("search"))
    return jsonify([s.to_dict() for s in suppliers]), 200


@suppliers_bp.post("")
@require_user
@require_role("owner")
def create_supplier_route():
    """
    Request body:
    {
        "name": "PartsPro Wholesale",  // required
        "phone": "(555) 700-1000",     // required
        "address": "..."               // optional
    }
    """
    try:
        form = validate_form(request.get_json(silent=True), SUPPLIER_POLICY)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    result = supplier_service.add_supplier(
        get_data_store(),
        name=form["name"],
        phone=form["phone"],
        address=form.get("address"),
    )
    return jsonify(result.record.to_dict()), 201
