"""Team membership roles and status."""

from enum import StrEnum


class TeamRole(StrEnum):
    """Role a user holds inside a single team."""

    LEADER = "Leader"
    MEMBER = "Member"


class MemberStatus(StrEnum):
    """Lifecycle of a team membership."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "OnLeave"
