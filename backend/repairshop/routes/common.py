# Overview: Shared helpers for turning service results into JSON responses.

from __future__ import annotations

from flask import jsonify

from ..datastore import MutationResult, Outcome


OUTCOME_STATUS = {
    Outcome.NOT_FOUND: 404,
    Outcome.ALREADY_REVIEWED: 409,
    Outcome.ILLEGAL_TRANSITION: 409,
    Outcome.CONFLICT: 409,
}


def outcome_error(result: MutationResult):
    """JSON error for a non-ok MutationResult."""
    body = {"error": result.message or result.outcome.value, "outcome": result.outcome.value}
    if result.record is not None:
        body["record"] = result.record.to_dict()
    return jsonify(body), OUTCOME_STATUS.get(result.outcome, 400)


def store_forbidden(store_id: str | None):
    return jsonify({"error": f"No access to store {store_id}"}), 403
