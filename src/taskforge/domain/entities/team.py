"""Team and team membership entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from taskforge.domain.value_objects import MemberStatus, TeamRole


@dataclass
class Team:
    """Group of users that owns projects."""

    id: UUID
    name: str
    description: str | None = None


@dataclass
class TeamMember:
    """Membership of a user in a team."""

    id: UUID
    team_id: UUID
    user_id: UUID
    team_role: TeamRole = TeamRole.MEMBER
    status: MemberStatus = MemberStatus.ACTIVE
    joined_at: datetime = field(default_factory=lambda: datetime.now(UTC))
