"""Task entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Task:
    """Unit of work inside a project, optionally assigned to a user."""

    id: UUID
    project_id: UUID
    title: str
    description: str | None = None
    assigned_to_id: UUID | None = None

    def assign_to(self, user_id: UUID | None) -> None:
        self.assigned_to_id = user_id
