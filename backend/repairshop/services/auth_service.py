# Overview: Identity lookups used by the request decorators.

"""
Identity Stand-in

Real authentication (passwords, sessions, tokens) is handled outside this
service. Here a user is resolved from the seeded user collection either by
email (the demo login) or by id (the X-User-Id request header). Inactive
users never resolve.
"""

from __future__ import annotations

from ..datastore import DataStore
from ..models import User


class AuthenticationError(Exception):
    """Raised when no active user matches the supplied identity."""
    pass


def get_user(store: DataStore, user_id: str | None) -> User | None:
    if not user_id:
        return None
    user = store.get("users", user_id)
    if user is None or not user.is_active:
        return None
    return user


def authenticate_email(store: DataStore, email: str) -> User:
    """
    Demo login: look up an active user by email (case-insensitive).

    Raises:
        AuthenticationError: if no active user has this email
    """
    if not isinstance(email, str):
        raise AuthenticationError("Email is required")
    needle = email.strip().lower()
    if not needle:
        raise AuthenticationError("Email is required")
    for user in store.users:
        if user.email.lower() == needle and user.is_active:
            return user
    raise AuthenticationError("Unknown or inactive account")
