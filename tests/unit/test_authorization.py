"""Unit tests for evaluators, policies and the authorization services."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from taskforge.application.authorization import (
    AuthorizationService,
    Decision,
    PolicyRegistry,
    Principal,
)
from taskforge.application.authorization.evaluators import (
    AdminEvaluator,
    GrantedPermissionEvaluator,
    TaskAccessEvaluator,
    TeamAccessEvaluator,
    _MembershipEvaluator,
    project_allows,
    task_allows,
    team_allows,
)
from taskforge.domain.entities import TeamMember
from taskforge.domain.exceptions import PermissionDenied
from taskforge.domain.value_objects import Requirement, ResourceType, SystemRole, TeamRole

from tests.conftest import FakeUnitOfWork, principal_for

MANAGER, DEVELOPER = SystemRole.MANAGER, SystemRole.DEVELOPER


def _member(team_role: TeamRole = TeamRole.MEMBER) -> TeamMember:
    return TeamMember(id=uuid4(), team_id=uuid4(), user_id=uuid4(), team_role=team_role)


class TestRules:
    def test_non_member_manager_may_only_read_team(self) -> None:
        assert team_allows("Read", MANAGER, None)
        assert not team_allows("Update", MANAGER, None)

    def test_non_member_developer_gets_nothing(self) -> None:
        assert not team_allows("Read", DEVELOPER, None)
        assert not project_allows("Read", DEVELOPER, None)
        assert not task_allows("Read", DEVELOPER, None, is_assignee=True)

    def test_member_reads_but_cannot_manage(self) -> None:
        member = _member()
        assert team_allows("Read", DEVELOPER, member)
        assert not team_allows("ManageMembers", DEVELOPER, member)
        assert not project_allows("ManageTasks", DEVELOPER, member)

    def test_leader_manages_team_and_projects(self) -> None:
        leader = _member(TeamRole.LEADER)
        assert team_allows("ManageMembers", DEVELOPER, leader)
        assert project_allows("Delete", DEVELOPER, leader)

    def test_create_requires_manager(self) -> None:
        leader = _member(TeamRole.LEADER)
        assert not team_allows("Create", DEVELOPER, leader)
        assert project_allows("Create", MANAGER, _member())

    def test_task_create_allowed_to_leader(self) -> None:
        assert task_allows("Create", DEVELOPER, _member(TeamRole.LEADER), is_assignee=False)

    def test_task_assignee_may_update_status_but_not_assign(self) -> None:
        member = _member()
        assert task_allows("UpdateStatus", DEVELOPER, member, is_assignee=True)
        assert task_allows("Update", DEVELOPER, member, is_assignee=True)
        assert not task_allows("Assign", DEVELOPER, member, is_assignee=True)
        assert not task_allows("UpdateStatus", DEVELOPER, member, is_assignee=False)

    def test_any_member_may_comment(self) -> None:
        assert task_allows("AddComment", DEVELOPER, _member(), is_assignee=False)


class TestEvaluators:
    def test_membership_evaluator_requires_rules(self, uow_factory) -> None:
        with pytest.raises(TypeError):
            _MembershipEvaluator(uow_factory)

    @pytest.mark.asyncio
    async def test_admin_evaluator(self) -> None:
        evaluator = AdminEvaluator()
        requirement = Requirement(ResourceType.TEAM, "Delete")
        admin = Principal(user_id_claim=str(uuid4()), role_claim="Admin")
        manager = Principal(user_id_claim=str(uuid4()), role_claim="Manager")
        assert await evaluator.evaluate(admin, requirement, None) == Decision.ALLOW
        assert await evaluator.evaluate(manager, requirement, None) == Decision.DENY

    @pytest.mark.asyncio
    async def test_admin_evaluator_requires_identity(self) -> None:
        principal = Principal(user_id_claim="not-a-uuid", role_claim="Admin")
        requirement = Requirement(ResourceType.TEAM, "Read")
        assert await AdminEvaluator().evaluate(principal, requirement, None) == Decision.DENY

    @pytest.mark.asyncio
    async def test_malformed_claims_deny_without_raising(self, fake_uow, uow_factory) -> None:
        team = fake_uow.add_team()
        evaluator = TeamAccessEvaluator(uow_factory)
        requirement = Requirement(ResourceType.TEAM, "Read")
        bad_id = Principal(user_id_claim="abc", role_claim="Manager")
        bad_role = Principal(user_id_claim=str(uuid4()), role_claim="Janitor")
        assert await evaluator.evaluate(bad_id, requirement, team) == Decision.DENY
        assert await evaluator.evaluate(bad_role, requirement, team) == Decision.DENY

    @pytest.mark.asyncio
    async def test_wrong_resource_denies(self, fake_uow, uow_factory) -> None:
        project = fake_uow.add_project(fake_uow.add_team())
        principal = principal_for(fake_uow.add_user(), "Manager")
        evaluator = TeamAccessEvaluator(uow_factory)
        decision = await evaluator.evaluate(principal, Requirement(ResourceType.TEAM, "Read"), project)
        assert decision == Decision.DENY

    @pytest.mark.asyncio
    async def test_task_evaluator_uses_project_team_membership(
        self, fake_uow: FakeUnitOfWork, uow_factory
    ) -> None:
        team = fake_uow.add_team()
        task = fake_uow.add_task(fake_uow.add_project(team))
        leader = fake_uow.add_user("Lead")
        fake_uow.add_member(team, leader, TeamRole.LEADER)

        decision = await TaskAccessEvaluator(uow_factory).evaluate(
            principal_for(leader, "Developer"), Requirement(ResourceType.TASK, "Assign"), task
        )
        assert decision == Decision.ALLOW

    @pytest.mark.asyncio
    async def test_task_with_missing_project_denies(self, fake_uow, uow_factory) -> None:
        team = fake_uow.add_team()
        project = fake_uow.add_project(team)
        task = fake_uow.add_task(project)
        fake_uow.projects._by_id.clear()
        user = fake_uow.add_user()
        fake_uow.add_member(team, user, TeamRole.LEADER)

        decision = await TaskAccessEvaluator(uow_factory).evaluate(
            principal_for(user, "Manager"), Requirement(ResourceType.TASK, "Read"), task
        )
        assert decision == Decision.DENY

    @pytest.mark.asyncio
    async def test_granted_permission_evaluator(self, fake_uow, resolver) -> None:
        user = fake_uow.add_user()
        role = fake_uow.add_role("Support")
        fake_uow.grant(role, fake_uow.add_permission("TaskDelete"))
        fake_uow.assign(user, role)
        evaluator = GrantedPermissionEvaluator(resolver)
        principal = principal_for(user, "Developer")

        assert await evaluator.evaluate(principal, Requirement("Task", "Delete"), None) == Decision.ALLOW
        assert await evaluator.evaluate(principal, Requirement("Task", "Assign"), None) == Decision.DENY


class TestAuthorizationService:
    @pytest.mark.asyncio
    async def test_task_delete_denied_by_default(self, fake_uow, authorization) -> None:
        team = fake_uow.add_team()
        task = fake_uow.add_task(fake_uow.add_project(team))
        user = fake_uow.add_user()
        fake_uow.add_member(team, user)

        decision = await authorization.authorize(
            principal_for(user, "Developer"), Requirement(ResourceType.TASK, "Delete"), task
        )
        assert decision == Decision.DENY

    @pytest.mark.asyncio
    async def test_no_evaluators_means_deny(self) -> None:
        service = AuthorizationService(PolicyRegistry({}))
        principal = Principal(user_id_claim=str(uuid4()), role_claim="Admin")
        assert await service.authorize(principal, Requirement("Team", "Read")) == Decision.DENY

    @pytest.mark.asyncio
    async def test_any_allow_wins(self) -> None:
        deny = AsyncMock()
        deny.evaluate.return_value = Decision.DENY
        allow = AsyncMock()
        allow.evaluate.return_value = Decision.ALLOW
        service = AuthorizationService(PolicyRegistry({ResourceType.TEAM: (deny, allow)}))
        assert await service.authorize(Principal(), Requirement("Team", "Read")) == Decision.ALLOW
        deny.evaluate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failing_evaluator_counts_as_deny(self, caplog) -> None:
        broken = AsyncMock()
        broken.evaluate.side_effect = RuntimeError("store down")
        service = AuthorizationService(PolicyRegistry({ResourceType.TEAM: (broken,)}))

        decision = await service.authorize(Principal(), Requirement("Team", "Read"))

        assert decision == Decision.DENY
        assert "counting as deny" in caplog.text

    @pytest.mark.asyncio
    async def test_failing_evaluator_does_not_block_later_allow(self) -> None:
        broken = AsyncMock()
        broken.evaluate.side_effect = RuntimeError("store down")
        allow = AsyncMock()
        allow.evaluate.return_value = Decision.ALLOW
        service = AuthorizationService(PolicyRegistry({ResourceType.TEAM: (broken, allow)}))
        assert await service.authorize(Principal(), Requirement("Team", "Read")) == Decision.ALLOW

    @pytest.mark.asyncio
    async def test_require_raises_permission_denied(self, authorization) -> None:
        with pytest.raises(PermissionDenied):
            await authorization.require(Principal(), Requirement("Team", "Read"))

    @pytest.mark.asyncio
    async def test_claim_policies(self, authorization) -> None:
        admin = Principal(user_id_claim=str(uuid4()), role_claim="Admin")
        developer = Principal(user_id_claim=str(uuid4()), role_claim="Developer")
        assert await authorization.authorize_policy(admin, "AdminOnly") == Decision.ALLOW
        assert await authorization.authorize_policy(developer, "AdminOnly") == Decision.DENY
        assert await authorization.authorize_policy(developer, "DeveloperOrManager") == Decision.ALLOW
        assert await authorization.authorize_policy(developer, "CanAccessOwnResources") == Decision.ALLOW
        assert await authorization.authorize_policy(Principal(), "CanAccessOwnResources") == Decision.DENY

    @pytest.mark.asyncio
    async def test_named_requirement_policy(self, fake_uow, authorization) -> None:
        team = fake_uow.add_team()
        user = fake_uow.add_user()
        fake_uow.add_member(team, user)
        principal = principal_for(user, "Developer")
        assert await authorization.authorize_policy(principal, "TeamRead", team) == Decision.ALLOW
        assert await authorization.authorize_policy(principal, "TeamDelete", team) == Decision.DENY

    @pytest.mark.asyncio
    async def test_unknown_policy_denies(self, authorization) -> None:
        admin = Principal(user_id_claim=str(uuid4()), role_claim="Admin")
        assert await authorization.authorize_policy(admin, "LaunchRockets") == Decision.DENY


class TestResourceAuthorizationService:
    @pytest.mark.asyncio
    async def test_loads_resource_and_authorizes(self, fake_uow, resource_authorization) -> None:
        team = fake_uow.add_team()
        project = fake_uow.add_project(team)
        user = fake_uow.add_user()
        fake_uow.add_member(team, user, TeamRole.LEADER)
        principal = principal_for(user, "Developer")

        assert await resource_authorization.authorize_project(principal, project.id, "Update") == Decision.ALLOW
        assert await resource_authorization.authorize_project(principal, project.id, "Create") == Decision.DENY

    @pytest.mark.asyncio
    async def test_missing_resource_denies(self, fake_uow, resource_authorization) -> None:
        principal = principal_for(fake_uow.add_user(), "Manager")
        assert await resource_authorization.authorize_task(principal, uuid4(), "Read") == Decision.DENY

    @pytest.mark.asyncio
    async def test_admin_delete_of_missing_project_passes_through(
        self, fake_uow, resource_authorization
    ) -> None:
        admin = principal_for(fake_uow.add_user(), "Admin")
        assert await resource_authorization.authorize_project(admin, uuid4(), "Delete") == Decision.ALLOW
        assert await resource_authorization.authorize_project(admin, uuid4(), "Update") == Decision.DENY

    @pytest.mark.asyncio
    async def test_admin_delete_of_missing_team_or_task_denies(
        self, fake_uow, resource_authorization
    ) -> None:
        admin = principal_for(fake_uow.add_user(), "Admin")
        assert await resource_authorization.authorize_team(admin, uuid4(), "Delete") == Decision.DENY
        assert await resource_authorization.authorize_task(admin, uuid4(), "Delete") == Decision.DENY

    @pytest.mark.asyncio
    async def test_anonymous_denied(self, fake_uow, resource_authorization) -> None:
        team = fake_uow.add_team()
        assert await resource_authorization.authorize_team(Principal(), team.id, "Read") == Decision.DENY

    @pytest.mark.asyncio
    async def test_unknown_operation_denies(self, fake_uow, resource_authorization) -> None:
        team = fake_uow.add_team()
        admin = principal_for(fake_uow.add_user(), "Admin")
        assert await resource_authorization.authorize_team(admin, team.id, "Assign") == Decision.DENY

    @pytest.mark.asyncio
    async def test_store_failure_denies(self, fake_uow, authorization) -> None:
        from contextlib import asynccontextmanager

        from taskforge.application.authorization import ResourceAuthorizationService

        @asynccontextmanager
        async def broken_factory():
            raise ConnectionError("database unavailable")
            yield

        service = ResourceAuthorizationService(broken_factory, authorization)
        admin = principal_for(fake_uow.add_user(), "Admin")
        assert await service.authorize_team(admin, uuid4(), "Read") == Decision.DENY
