from __future__ import annotations

from dataclasses import dataclass

ROLE_OWNER = "owner"
ROLE_STAFF = "staff"
VALID_ROLES = {ROLE_OWNER, ROLE_STAFF}


@dataclass(frozen=True)
class User:
    """
    Acting user as supplied by the identity collaborator.

    Only `role` and `store_id` drive data scoping: owners see every store,
    staff see the single store they are bound to.
    """
    id: str
    name: str
    email: str
    role: str
    store_id: str | None = None
    is_active: bool = True

    @property
    def is_owner(self) -> bool:
        return self.role == ROLE_OWNER

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "store_id": self.store_id,
            "is_active": self.is_active,
        }
