"""Project entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Project:
    """Project owned by a team."""

    id: UUID
    team_id: UUID
    name: str
    description: str | None = None
