"""Permission entity - atomic named capability."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Permission:
    """Named capability granted to roles."""

    id: UUID
    name: str
