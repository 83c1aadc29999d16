"""Role entity for RBAC."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Role:
    """Named grouping of permissions. ``parent_role_id`` links to a parent role."""

    id: UUID
    name: str
    parent_role_id: UUID | None = None
