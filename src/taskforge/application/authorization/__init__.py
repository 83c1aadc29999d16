"""Role resolution and resource-based authorization."""

from taskforge.application.authorization.evaluators import Decision, Evaluator
from taskforge.application.authorization.permission_resolver import PermissionResolver
from taskforge.application.authorization.policies import (
    CLAIM_POLICIES,
    REQUIREMENTS,
    PolicyRegistry,
    build_policy_registry,
)
from taskforge.application.authorization.principal import Principal
from taskforge.application.authorization.service import (
    AuthorizationService,
    ResourceAuthorizationService,
)

__all__ = [
    "CLAIM_POLICIES",
    "REQUIREMENTS",
    "AuthorizationService",
    "Decision",
    "Evaluator",
    "PermissionResolver",
    "PolicyRegistry",
    "Principal",
    "ResourceAuthorizationService",
    "build_policy_registry",
]
