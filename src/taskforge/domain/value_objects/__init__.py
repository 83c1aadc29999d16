"""Domain value objects."""

from taskforge.domain.value_objects.requirement import (
    ProjectOperation,
    Requirement,
    ResourceType,
    TaskOperation,
    TeamOperation,
    all_requirements,
)
from taskforge.domain.value_objects.system_role import SystemRole
from taskforge.domain.value_objects.team_role import MemberStatus, TeamRole

__all__ = [
    "MemberStatus",
    "ProjectOperation",
    "Requirement",
    "ResourceType",
    "SystemRole",
    "TaskOperation",
    "TeamOperation",
    "TeamRole",
    "all_requirements",
]
