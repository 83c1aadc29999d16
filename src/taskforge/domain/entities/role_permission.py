"""RolePermission join entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class RolePermission:
    """Permission granted to a role."""

    id: UUID
    role_id: UUID
    permission_id: UUID
