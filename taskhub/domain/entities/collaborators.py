"""Entities owned by neighbouring subsystems (users, teams, tasks).

Only the attributes the grouping and notification core reads are modelled.
"""

from __future__ import annotations

from dataclasses import dataclass, field

TEAM_ROLE_MEMBER = "member"
TEAM_ROLE_MANAGER = "manager"
TEAM_ROLE_CREATOR = "creator"

# Higher rank means more authority inside a team.
TEAM_ROLE_RANKS = {
    TEAM_ROLE_MEMBER: 0,
    TEAM_ROLE_MANAGER: 1,
    TEAM_ROLE_CREATOR: 2,
}


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    role: str = "user"
    is_active: bool = True

    def display_name(self) -> str:
        return self.name or self.email

    def is_admin(self) -> bool:
        return self.role.lower() == "admin"


@dataclass
class TeamMember:
    user_id: int
    role: str = TEAM_ROLE_MEMBER
    can_write: bool = False


@dataclass
class Team:
    id: int | None
    name: str
    owner_id: int
    members: list[TeamMember] = field(default_factory=list)

    def member_ids(self) -> list[int]:
        return [member.user_id for member in self.members]

    def has_member(self, user_id: int) -> bool:
        return any(member.user_id == user_id for member in self.members)


@dataclass
class Task:
    """Task fields that reference grouping trees by label."""

    id: int | None
    title: str
    team_id: int | None = None
    group: str = "ungrouped"
    team_group: str = "ungrouped"


__all__ = [
    "TEAM_ROLE_CREATOR",
    "TEAM_ROLE_MANAGER",
    "TEAM_ROLE_MEMBER",
    "TEAM_ROLE_RANKS",
    "Task",
    "Team",
    "TeamMember",
    "User",
]
