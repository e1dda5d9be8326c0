# Overview: Demo login and current-user endpoints.

"""
Identity routes.

Login only resolves a seeded account by email and hands back the user
record; the client then sends X-User-Id on every request.
"""

from flask import Blueprint, request, jsonify, g

from ..decorators import require_user
from ..extensions import get_data_store
from ..seed import DEMO_ACCOUNTS
from ..services import auth_service
from ..services.auth_service import AuthenticationError


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    try:
        user = auth_service.authenticate_email(get_data_store(), data.get("email", ""))
    except AuthenticationError as e:
        return jsonify({"error": str(e)}), 401
    return jsonify({"user": user.to_dict()}), 200


@auth_bp.get("/demo-accounts")
def demo_accounts_route():
    return jsonify([
        {"email": email, "role": role, "description": description}
        for email, role, description in DEMO_ACCOUNTS
    ]), 200


@auth_bp.get("/me")
@require_user
def me_route():
    return jsonify({"user": g.current_user.to_dict()}), 200
