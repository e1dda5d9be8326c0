# backend/repairshop/config.py
from __future__ import annotations
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Load the demo stores/customers/repairs into every new data store
    SEED_SAMPLE_DATA = _env_bool("SEED_SAMPLE_DATA", True)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Form defaults
    DEFAULT_REORDER_LEVEL = int(os.environ.get("DEFAULT_REORDER_LEVEL", "10"))
    DEFAULT_ESTIMATED_DAYS = int(os.environ.get("DEFAULT_ESTIMATED_DAYS", "3"))

    RECENT_ACTIVITY_LIMIT = int(os.environ.get("RECENT_ACTIVITY_LIMIT", "5"))

    # CORS allowlist for the browser front-end (comma separated)
    CORS_ORIGINS = os.environ.get(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8080",
    )
