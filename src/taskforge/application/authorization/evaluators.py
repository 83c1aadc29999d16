"""Policy evaluators - each votes allow/deny for a requirement.

Evaluators never raise for bad input: missing or malformed claims and
resources of the wrong type are a Deny. Store failures propagate to the
aggregator, which treats them as Deny as well.
"""

import logging
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, Protocol

from taskforge.application.authorization.permission_resolver import PermissionResolver
from taskforge.application.authorization.principal import Principal
from taskforge.application.ports import UnitOfWork, UnitOfWorkFactory
from taskforge.domain.entities import Project, Task, Team, TeamMember
from taskforge.domain.value_objects import (
    ProjectOperation,
    Requirement,
    ResourceType,
    SystemRole,
    TaskOperation,
    TeamOperation,
    TeamRole,
)

logger = logging.getLogger(__name__)


class Decision(StrEnum):
    """Outcome of a single vote or of a whole authorization check."""

    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def of(cls, allowed: bool) -> "Decision":
        return cls.ALLOW if allowed else cls.DENY


class Evaluator(Protocol):
    """Votes on one requirement for one principal and resource."""

    async def evaluate(
        self, principal: Principal, requirement: Requirement, resource: Any
    ) -> Decision: ...


# --- Rules ---


def _is_leader_or_manager(role: SystemRole, member: TeamMember) -> bool:
    return member.team_role == TeamRole.LEADER or role == SystemRole.MANAGER


def team_allows(operation: str, role: SystemRole, member: TeamMember | None) -> bool:
    """Team rules for a non-admin caller."""
    if member is None:
        # Managers can read teams they do not belong to
        return role == SystemRole.MANAGER and operation == TeamOperation.READ
    match operation:
        case TeamOperation.READ:
            return True
        case TeamOperation.CREATE:
            return role == SystemRole.MANAGER
        case TeamOperation.UPDATE | TeamOperation.DELETE | TeamOperation.MANAGE_MEMBERS:
            return _is_leader_or_manager(role, member)
    return False


def project_allows(operation: str, role: SystemRole, member: TeamMember | None) -> bool:
    """Project rules for a non-admin caller; ``member`` is the membership in the owning team."""
    if member is None:
        return role == SystemRole.MANAGER and operation == ProjectOperation.READ
    match operation:
        case ProjectOperation.READ:
            return True
        case ProjectOperation.CREATE:
            return role == SystemRole.MANAGER
        case ProjectOperation.UPDATE | ProjectOperation.DELETE | ProjectOperation.MANAGE_TASKS:
            return _is_leader_or_manager(role, member)
    return False


def task_allows(
    operation: str, role: SystemRole, member: TeamMember | None, is_assignee: bool
) -> bool:
    """Task rules for a non-admin caller; ``member`` is the membership in the project's team."""
    if member is None:
        return role == SystemRole.MANAGER and operation == TaskOperation.READ
    match operation:
        case TaskOperation.READ | TaskOperation.ADD_COMMENT:
            return True
        case TaskOperation.UPDATE | TaskOperation.UPDATE_STATUS:
            return is_assignee or _is_leader_or_manager(role, member)
        case TaskOperation.CREATE | TaskOperation.DELETE | TaskOperation.ASSIGN:
            return _is_leader_or_manager(role, member)
    return False


# --- Evaluators ---


class AdminEvaluator:
    """Admins are granted every requirement."""

    async def evaluate(
        self, principal: Principal, requirement: Requirement, resource: Any
    ) -> Decision:
        if principal.user_id is None:
            return Decision.DENY
        return Decision.of(principal.system_role == SystemRole.ADMIN)


class _MembershipEvaluator(ABC):
    """Shared claim parsing and membership lookup for resource evaluators."""

    resource_type: ResourceType
    resource_class: type

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def evaluate(
        self, principal: Principal, requirement: Requirement, resource: Any
    ) -> Decision:
        if requirement.resource_type != self.resource_type:
            return Decision.DENY
        if not isinstance(resource, self.resource_class):
            logger.warning(
                "Missing or invalid %s resource for %s",
                self.resource_type.value,
                requirement.policy_name,
            )
            return Decision.DENY

        user_id = principal.user_id
        if user_id is None:
            logger.warning("Invalid user ID in claims: %r", principal.user_id_claim)
            return Decision.DENY
        role = principal.system_role
        if role is None:
            logger.warning("Invalid role in claims: %r", principal.role_claim)
            return Decision.DENY

        async with self._uow_factory() as uow:
            allowed = await self._allows(uow, requirement.operation, role, user_id, resource)

        logger.debug(
            "User %s %s %s on %s %s",
            user_id,
            "granted" if allowed else "denied",
            requirement.operation,
            self.resource_type.value,
            resource.id,
        )
        return Decision.of(allowed)

    @abstractmethod
    async def _allows(self, uow: UnitOfWork, operation, role, user_id, resource) -> bool: ...

    @staticmethod
    async def _membership(uow: UnitOfWork, team_id, user_id) -> TeamMember | None:
        members = await uow.team_members.get_where(team_id=team_id, user_id=user_id)
        return members[0] if members else None


class TeamAccessEvaluator(_MembershipEvaluator):
    """Leaders and managers manage their team; members read it."""

    resource_type = ResourceType.TEAM
    resource_class = Team

    async def _allows(self, uow, operation, role, user_id, resource: Team) -> bool:
        member = await self._membership(uow, resource.id, user_id)
        return team_allows(operation, role, member)


class ProjectAccessEvaluator(_MembershipEvaluator):
    """Access follows membership in the team that owns the project."""

    resource_type = ResourceType.PROJECT
    resource_class = Project

    async def _allows(self, uow, operation, role, user_id, resource: Project) -> bool:
        member = await self._membership(uow, resource.team_id, user_id)
        return project_allows(operation, role, member)


class TaskAccessEvaluator(_MembershipEvaluator):
    """Access follows membership in the team owning the task's project, plus assignment."""

    resource_type = ResourceType.TASK
    resource_class = Task

    async def _allows(self, uow, operation, role, user_id, resource: Task) -> bool:
        project = await uow.projects.get_by_id(resource.project_id)
        if project is None:
            logger.warning("Project not found for task %s", resource.id)
            return False
        member = await self._membership(uow, project.team_id, user_id)
        return task_allows(operation, role, member, resource.assigned_to_id == user_id)


class GrantedPermissionEvaluator:
    """Allows callers whose effective permissions contain the requirement's policy name."""

    def __init__(self, resolver: PermissionResolver) -> None:
        self._resolver = resolver

    async def evaluate(
        self, principal: Principal, requirement: Requirement, resource: Any
    ) -> Decision:
        user_id = principal.user_id
        if user_id is None:
            return Decision.DENY
        permissions = await self._resolver.get_effective_permissions(user_id)
        return Decision.of(requirement.policy_name in {p.name for p in permissions})
