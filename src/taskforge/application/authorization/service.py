"""Authorization aggregator and resource-loading front end."""

import logging
from typing import Any
from uuid import UUID

from taskforge.application.authorization.evaluators import Decision
from taskforge.application.authorization.policies import PolicyRegistry
from taskforge.application.authorization.principal import Principal
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.domain.exceptions import PermissionDenied
from taskforge.domain.value_objects import ProjectOperation, Requirement, ResourceType, SystemRole

logger = logging.getLogger(__name__)


class AuthorizationService:
    """OR-reduces evaluator votes; anything short of an explicit Allow is a Deny."""

    def __init__(self, registry: PolicyRegistry) -> None:
        self._registry = registry

    async def authorize(
        self, principal: Principal, requirement: Requirement, resource: Any = None
    ) -> Decision:
        """Decide one requirement for ``principal`` on ``resource``."""
        for evaluator in self._registry.evaluators_for(requirement):
            try:
                vote = await evaluator.evaluate(principal, requirement, resource)
            except Exception:
                logger.exception(
                    "Evaluator %s failed for %s; counting as deny",
                    type(evaluator).__name__,
                    requirement.policy_name,
                )
                continue
            if vote == Decision.ALLOW:
                return Decision.ALLOW
        logger.debug(
            "No evaluator allowed %s for user %r", requirement.policy_name, principal.user_id_claim
        )
        return Decision.DENY

    async def authorize_policy(
        self, principal: Principal, policy_name: str, resource: Any = None
    ) -> Decision:
        """Decide a named policy: a claims assertion or a resource requirement."""
        assertion = self._registry.claim_policy(policy_name)
        if assertion is not None:
            try:
                return Decision.of(assertion(principal))
            except Exception:
                logger.exception("Claims policy %s failed; counting as deny", policy_name)
                return Decision.DENY

        requirement = self._registry.requirement(policy_name)
        if requirement is None:
            logger.error("Unknown authorization policy %s", policy_name)
            return Decision.DENY
        return await self.authorize(principal, requirement, resource)

    async def require(
        self, principal: Principal, requirement: Requirement, resource: Any = None
    ) -> None:
        """Raise PermissionDenied unless the requirement is satisfied."""
        if await self.authorize(principal, requirement, resource) != Decision.ALLOW:
            raise PermissionDenied(
                f"{requirement.operation} access to {requirement.resource_type.value.lower()} denied"
            )


class ResourceAuthorizationService:
    """Loads a team, project or task by id and authorizes an operation on it."""

    _repositories = {
        ResourceType.TEAM: "teams",
        ResourceType.PROJECT: "projects",
        ResourceType.TASK: "tasks",
    }

    def __init__(
        self, unit_of_work_factory: UnitOfWorkFactory, authorization: AuthorizationService
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorization = authorization

    async def authorize_team(self, principal: Principal, team_id: UUID, operation: str) -> Decision:
        return await self._authorize(principal, ResourceType.TEAM, team_id, operation)

    async def authorize_project(
        self, principal: Principal, project_id: UUID, operation: str
    ) -> Decision:
        return await self._authorize(principal, ResourceType.PROJECT, project_id, operation)

    async def authorize_task(self, principal: Principal, task_id: UUID, operation: str) -> Decision:
        return await self._authorize(principal, ResourceType.TASK, task_id, operation)

    async def _authorize(
        self, principal: Principal, resource_type: ResourceType, resource_id: UUID, operation: str
    ) -> Decision:
        if principal.user_id is None:
            logger.warning("No user context available for %s authorization", resource_type.value)
            return Decision.DENY
        try:
            requirement = Requirement(resource_type, operation)
            async with self._uow_factory() as uow:
                repository = getattr(uow, self._repositories[resource_type])
                resource = await repository.get_by_id(resource_id)
        except Exception:
            logger.exception(
                "Error authorizing %s access for %s %s",
                operation,
                resource_type.value,
                resource_id,
            )
            return Decision.DENY

        if resource is None:
            logger.warning("%s not found: %s", resource_type.value, resource_id)
            # Admins may proceed with a project delete so the handler can report NotFound
            if (
                resource_type == ResourceType.PROJECT
                and requirement.operation == ProjectOperation.DELETE
                and principal.system_role == SystemRole.ADMIN
            ):
                return Decision.ALLOW
            return Decision.DENY

        return await self._authorization.authorize(principal, requirement, resource)
