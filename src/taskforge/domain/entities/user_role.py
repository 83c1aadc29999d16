"""UserRole join entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class UserRole:
    """Role assigned to a user."""

    id: UUID
    user_id: UUID
    role_id: UUID
