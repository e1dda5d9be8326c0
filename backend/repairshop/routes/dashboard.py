# Overview: Dashboard counters and recent activity for the acting user's stores.

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_user
from ..extensions import get_data_store
from ..services import query_service
from ..services.access_service import scope_to_user


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.get("/stats")
@require_user
def stats_route():
    snapshot = get_data_store().snapshot()
    return jsonify(query_service.dashboard_stats(snapshot, g.current_user)), 200


@dashboard_bp.get("/recent-activity")
@require_user
def recent_activity_route():
    """
    Query parameters:
    - limit: number of repairs (default RECENT_ACTIVITY_LIMIT, max 50)
    """
    limit = request.args.get("limit", current_app.config["RECENT_ACTIVITY_LIMIT"], type=int)
    limit = max(0, min(limit, 50))

    snapshot = get_data_store().snapshot()
    repairs = scope_to_user(g.current_user, snapshot.repairs)
    rows = query_service.recent_activity(repairs, snapshot.customers, limit=limit)
    return jsonify({"items": rows, "count": len(rows)}), 200
