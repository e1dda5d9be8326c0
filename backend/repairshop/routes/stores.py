# Overview: Flask API routes for stores; read-only, scoped to the acting user.

from flask import Blueprint, jsonify, g

from ..decorators import require_user
from ..extensions import get_data_store
from ..services import store_service
from ..services.access_service import user_can_access_store


stores_bp = Blueprint("stores", __name__, url_prefix="/api/stores")


@stores_bp.get("")
@require_user
def list_stores():
    stores = store_service.list_stores(get_data_store(), user=g.current_user)
    return jsonify([store.to_dict() for store in stores]), 200


@stores_bp.get("/<store_id>")
@require_user
def get_store(store_id: str):
    store = store_service.get_store(get_data_store(), store_id)
    if not store or not user_can_access_store(g.current_user, store_id):
        return jsonify({"error": "Store not found"}), 404
    return jsonify(store.to_dict()), 200
