"""Handlers, validators and sanitization exemptions per request type."""

from taskforge.application.authorization import PermissionResolver, ResourceAuthorizationService
from taskforge.application.pipeline import (
    RequestPipeline,
    SanitizationPolicy,
    default_behaviors,
)
from taskforge.application.ports import PasswordHasher, UnitOfWorkFactory
from taskforge.application.use_cases.roles import (
    AssignPermissionCommand,
    AssignPermissionUseCase,
    AssignPermissionValidator,
    InsertRoleCommand,
    InsertRoleUseCase,
    InsertRoleValidator,
    UpdateRoleCommand,
    UpdateRoleUseCase,
    UpdateRoleValidator,
)
from taskforge.application.use_cases.tasks import (
    AssignTaskCommand,
    AssignTaskUseCase,
    AssignTaskValidator,
)
from taskforge.application.use_cases.users import (
    INSERT_USER_EXEMPTIONS,
    UPDATE_USER_EXEMPTIONS,
    AssignRoleCommand,
    AssignRoleUseCase,
    AssignRoleValidator,
    DeleteUserCommand,
    DeleteUserUseCase,
    DeleteUserValidator,
    GetUserPermissionsQuery,
    GetUserPermissionsUseCase,
    InsertUserCommand,
    InsertUserUseCase,
    InsertUserValidator,
    UpdateUserCommand,
    UpdateUserUseCase,
    UpdateUserValidator,
)


def build_sanitization_policy() -> SanitizationPolicy:
    return SanitizationPolicy(
        {
            InsertUserCommand: INSERT_USER_EXEMPTIONS,
            UpdateUserCommand: UPDATE_USER_EXEMPTIONS,
        }
    )


def build_request_pipeline(
    unit_of_work_factory: UnitOfWorkFactory,
    password_hasher: PasswordHasher,
    resolver: PermissionResolver,
    resource_authorization: ResourceAuthorizationService,
    default_role_name: str = "Employee",
) -> RequestPipeline:
    """Wire every request type to its handler behind the default behaviors."""
    uow = unit_of_work_factory
    validators = {
        InsertUserCommand: [InsertUserValidator(uow)],
        UpdateUserCommand: [UpdateUserValidator(uow)],
        DeleteUserCommand: [DeleteUserValidator()],
        AssignRoleCommand: [AssignRoleValidator(uow)],
        InsertRoleCommand: [InsertRoleValidator(uow)],
        UpdateRoleCommand: [UpdateRoleValidator(uow)],
        AssignPermissionCommand: [AssignPermissionValidator(uow)],
        AssignTaskCommand: [AssignTaskValidator(uow)],
    }
    handlers = {
        InsertUserCommand: InsertUserUseCase(uow, password_hasher, default_role_name),
        UpdateUserCommand: UpdateUserUseCase(uow, password_hasher),
        DeleteUserCommand: DeleteUserUseCase(uow),
        AssignRoleCommand: AssignRoleUseCase(uow),
        GetUserPermissionsQuery: GetUserPermissionsUseCase(uow, resolver),
        InsertRoleCommand: InsertRoleUseCase(uow),
        UpdateRoleCommand: UpdateRoleUseCase(uow),
        AssignPermissionCommand: AssignPermissionUseCase(uow),
        AssignTaskCommand: AssignTaskUseCase(uow, resource_authorization),
    }
    return RequestPipeline(default_behaviors(build_sanitization_policy(), validators), handlers)
