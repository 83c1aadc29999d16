"""Domain exceptions."""


class TaskforgeError(Exception):
    """Base exception for Taskforge."""

    pass


class PermissionDenied(TaskforgeError):
    """Caller is not authorized for the requested operation."""

    pass


class NotFound(TaskforgeError):
    """Requested entity was not found."""

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} '{key}' was not found")


class ValidationError(TaskforgeError):
    """Validation failed for input data.

    ``errors`` maps a field name to every message reported for it.
    """

    def __init__(self, errors: dict[str, list[str]], message: str | None = None) -> None:
        self.errors = errors
        super().__init__(message or "One or more validation failures have occurred")


class RoleHierarchyCycle(ValidationError):
    """Assigning the parent role would make the hierarchy loop back on itself."""

    def __init__(self, role_id: object, parent_role_id: object) -> None:
        super().__init__(
            {"parent_role_id": [f"Role '{parent_role_id}' cannot be a parent of role '{role_id}'"]},
            message="Role hierarchy must not contain cycles",
        )


class RequestCancelled(TaskforgeError):
    """The request was cancelled before it completed."""

    pass
