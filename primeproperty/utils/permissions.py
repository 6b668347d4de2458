"""
Authorization policy

Predicates take the actor mapping resolved by the auth dependency
(id, name, email, role, status) and never touch the database.
"""
from typing import Optional
from primeproperty.utils.exceptions import ForbiddenError

ADMIN_ROLE = "admin"


def is_admin(actor: dict) -> bool:
    return actor.get("role") == ADMIN_ROLE


def is_owner_or_admin(actor: dict, owner_id: Optional[int]) -> bool:
    if is_admin(actor):
        return True
    return owner_id is not None and actor.get("id") == owner_id


def ensure_admin(actor: dict) -> None:
    if not is_admin(actor):
        raise ForbiddenError("Admin access required")


def ensure_owner_or_admin(actor: dict, owner_id: Optional[int]) -> None:
    if not is_owner_or_admin(actor, owner_id):
        raise ForbiddenError("Forbidden")
