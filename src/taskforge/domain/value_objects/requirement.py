"""Authorization requirements - (resource type, operation) pairs."""

from dataclasses import dataclass
from enum import StrEnum


class ResourceType(StrEnum):
    """Resource types guarded by resource-based authorization."""

    TEAM = "Team"
    PROJECT = "Project"
    TASK = "Task"


class TeamOperation(StrEnum):
    READ = "Read"
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    MANAGE_MEMBERS = "ManageMembers"


class ProjectOperation(StrEnum):
    READ = "Read"
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    MANAGE_TASKS = "ManageTasks"


class TaskOperation(StrEnum):
    READ = "Read"
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    ASSIGN = "Assign"
    UPDATE_STATUS = "UpdateStatus"
    ADD_COMMENT = "AddComment"


OPERATIONS: dict[ResourceType, type[StrEnum]] = {
    ResourceType.TEAM: TeamOperation,
    ResourceType.PROJECT: ProjectOperation,
    ResourceType.TASK: TaskOperation,
}


@dataclass(frozen=True)
class Requirement:
    """Authorization question: may the caller perform ``operation`` on ``resource_type``?"""

    resource_type: ResourceType
    operation: str

    def __post_init__(self) -> None:
        resource_type = ResourceType(self.resource_type)
        allowed = OPERATIONS[resource_type]
        try:
            operation = allowed(self.operation)
        except ValueError:
            raise ValueError(
                f"'{self.operation}' is not a {resource_type.value} operation"
            ) from None
        object.__setattr__(self, "resource_type", resource_type)
        object.__setattr__(self, "operation", operation)

    @property
    def policy_name(self) -> str:
        """Named policy exposed at the authorization boundary, e.g. ``TaskAssign``."""
        return f"{self.resource_type.value}{self.operation.value}"


def all_requirements() -> list[Requirement]:
    """Every requirement of the closed per-resource enumeration."""
    return [
        Requirement(resource_type, operation)
        for resource_type, operations in OPERATIONS.items()
        for operation in operations
    ]
