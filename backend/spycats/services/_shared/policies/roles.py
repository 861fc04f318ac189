"""Role definitions and role-based access helpers."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class Role(str, Enum):
    """Agency roles carried in the ``role`` token claim."""

    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


#: Roles allowed to manage cats, missions and targets.
STAFF_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER})


def has_role(actor_role: str | Role | None, allowed: Iterable[str | Role]) -> bool:
    """Return True if ``actor_role`` is one of ``allowed``.

    Unknown or missing roles never match.
    """
    if actor_role is None:
        return False
    try:
        role = Role(actor_role)
    except ValueError:
        return False
    return role in {Role(r) for r in allowed}
