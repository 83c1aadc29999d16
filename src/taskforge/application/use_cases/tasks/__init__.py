"""Task use cases."""

from taskforge.application.use_cases.tasks.assign_task import (
    AssignTaskCommand,
    AssignTaskUseCase,
    AssignTaskValidator,
)

__all__ = ["AssignTaskCommand", "AssignTaskUseCase", "AssignTaskValidator"]
