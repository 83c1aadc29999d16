"""Policy registry - named policies, requirements and their evaluators."""

from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType

from taskforge.application.authorization.evaluators import (
    AdminEvaluator,
    Evaluator,
    GrantedPermissionEvaluator,
    ProjectAccessEvaluator,
    TaskAccessEvaluator,
    TeamAccessEvaluator,
)
from taskforge.application.authorization.permission_resolver import PermissionResolver
from taskforge.application.authorization.principal import Principal
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.domain.value_objects import (
    Requirement,
    ResourceType,
    SystemRole,
    all_requirements,
)

ClaimAssertion = Callable[[Principal], bool]

#: Every resource requirement under its policy name (``TeamRead`` ... ``TaskAddComment``).
REQUIREMENTS: Mapping[str, Requirement] = MappingProxyType(
    {requirement.policy_name: requirement for requirement in all_requirements()}
)


def _has_role(*roles: SystemRole) -> ClaimAssertion:
    def assertion(principal: Principal) -> bool:
        return principal.system_role in roles

    return assertion


def has_identity(principal: Principal) -> bool:
    return bool(principal.user_id_claim)


#: Standalone claims-only policies. These are not part of any requirement's OR-group.
CLAIM_POLICIES: Mapping[str, ClaimAssertion] = MappingProxyType(
    {
        "AdminOnly": _has_role(SystemRole.ADMIN),
        "ManagerOrAdmin": _has_role(SystemRole.MANAGER, SystemRole.ADMIN),
        "DeveloperOrManager": _has_role(
            SystemRole.DEVELOPER, SystemRole.MANAGER, SystemRole.ADMIN
        ),
        "CanAccessOwnResources": has_identity,
        # A team-specific leader check needs a resource; use TeamUpdate for that.
        "TeamLeaderOrManager": _has_role(SystemRole.MANAGER, SystemRole.ADMIN),
    }
)


class PolicyRegistry:
    """Static mapping from resource type to the evaluators OR-ed for its requirements."""

    def __init__(
        self,
        evaluators: Mapping[ResourceType, Sequence[Evaluator]],
        claim_policies: Mapping[str, ClaimAssertion] = CLAIM_POLICIES,
    ) -> None:
        self._evaluators = {rt: tuple(evs) for rt, evs in evaluators.items()}
        self._claim_policies = dict(claim_policies)

    def evaluators_for(self, requirement: Requirement) -> tuple[Evaluator, ...]:
        return self._evaluators.get(requirement.resource_type, ())

    def claim_policy(self, name: str) -> ClaimAssertion | None:
        return self._claim_policies.get(name)

    @staticmethod
    def requirement(name: str) -> Requirement | None:
        return REQUIREMENTS.get(name)


def build_policy_registry(
    unit_of_work_factory: UnitOfWorkFactory, resolver: PermissionResolver
) -> PolicyRegistry:
    """Default registry: admin shortcut, resource rules, then explicit grants."""
    admin = AdminEvaluator()
    granted = GrantedPermissionEvaluator(resolver)
    return PolicyRegistry(
        {
            ResourceType.TEAM: (admin, TeamAccessEvaluator(unit_of_work_factory), granted),
            ResourceType.PROJECT: (admin, ProjectAccessEvaluator(unit_of_work_factory), granted),
            ResourceType.TASK: (admin, TaskAccessEvaluator(unit_of_work_factory), granted),
        }
    )
