"""Role hierarchy rules."""

from collections.abc import Mapping
from uuid import UUID

from taskforge.domain.entities import Role
from taskforge.domain.exceptions import RoleHierarchyCycle


def find_cycle(
    role_id: UUID, parent_role_id: UUID | None, roles: Mapping[UUID, Role]
) -> list[UUID] | None:
    """Return the parent chain that leads back to ``role_id``, or None.

    ``roles`` is the arena of known roles keyed by id. A chain that reaches a
    role missing from the arena stops there. A chain that loops without
    passing ``role_id`` (pre-existing corruption) also stops.
    """
    chain: list[UUID] = []
    seen: set[UUID] = set()
    current = parent_role_id
    while current is not None:
        chain.append(current)
        if current == role_id:
            return chain
        if current in seen:
            return None
        seen.add(current)
        parent = roles.get(current)
        current = parent.parent_role_id if parent else None
    return None


def ensure_acyclic(
    role_id: UUID, parent_role_id: UUID | None, roles: Mapping[UUID, Role]
) -> None:
    """Raise RoleHierarchyCycle if ``parent_role_id`` would loop back to ``role_id``."""
    if find_cycle(role_id, parent_role_id, roles) is not None:
        raise RoleHierarchyCycle(role_id, parent_role_id)
