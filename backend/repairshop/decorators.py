# Overview: Request decorators resolving the acting user and enforcing roles.

from functools import wraps
from flask import request, jsonify, g, current_app

from .extensions import get_data_store
from .models import ROLE_OWNER
from .services import auth_service


USER_HEADER = "X-User-Id"


def _is_authenticated() -> bool:
    return getattr(g, "current_user", None) is not None


def require_user(f):
    """
    Resolve the acting user from the X-User-Id header.

    Sets g.current_user. Returns 401 when the header is missing or names an
    unknown/inactive user.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user_id = request.headers.get(USER_HEADER, "").strip()
        if not user_id:
            return jsonify({"error": "Authentication required"}), 401

        user = auth_service.get_user(get_data_store(), user_id)
        if user is None:
            current_app.logger.warning("rejected unknown user id %r on %s", user_id, request.path)
            return jsonify({"error": "Invalid or inactive user"}), 401

        g.current_user = user
        return f(*args, **kwargs)

    return decorated_function


def require_role(role: str = ROLE_OWNER):
    """Require the acting user to have `role`. Must be stacked under @require_user."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            user = g.current_user
            if user.role != role:
                current_app.logger.info(
                    "user %s (%s) denied %s %s: requires %s",
                    user.id, user.role, request.method, request.path, role,
                )
                return jsonify({
                    "error": "Permission denied",
                    "required_role": role,
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator
