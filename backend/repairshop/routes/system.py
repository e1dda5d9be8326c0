# backend/repairshop/routes/system.py
"""
System health endpoint.

Reports data store reachability, its version counter and collection sizes.
"""

import time
from flask import Blueprint, current_app

from ..extensions import get_data_store

system_bp = Blueprint("system", __name__)


def check_data_store_health() -> dict:
    start_time = time.time()
    try:
        store = get_data_store()
        counts = store.counts()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "version": store.version,
            "details": counts,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Data store health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Data store error",
        }


@system_bp.get("/health")
def health():
    data_store = check_data_store_health()
    status_code = 200 if data_store["status"] == "healthy" else 503
    return {"status": data_store["status"], "data_store": data_store}, status_code
