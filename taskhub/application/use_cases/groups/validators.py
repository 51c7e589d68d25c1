"""Validation helpers for grouping tree use cases."""

from __future__ import annotations

from sqlalchemy.orm import Session

from taskhub.domain.entities import GROUP_KINDS, GroupScope
from taskhub.domain.exceptions import NotFoundError, UnauthorizedError, ValidationError
from taskhub.infrastructure.repositories import GroupRepository, TeamRepository


def normalize_group_name(name: str | None) -> str:
    """Return ``name`` stripped of surrounding whitespace or raise if empty."""

    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Group name is required")
    return cleaned


def ensure_group_kind(kind: str) -> str:
    if kind not in GROUP_KINDS:
        allowed = ", ".join(sorted(GROUP_KINDS))
        raise ValidationError(f"Group kind must be one of: {allowed}")
    return kind


def ensure_order(value: int | None) -> int:
    if value is None or value < 0:
        raise ValidationError("Order must be a non-negative integer")
    return value


def ensure_team_member(session: Session, *, team_id: int, user_id: int) -> None:
    """Raise unless ``user_id`` belongs to the team ``team_id``."""

    repository = TeamRepository(session)
    if repository.get(team_id) is None:
        raise NotFoundError("Team not found")
    if not repository.is_member(team_id, user_id):
        raise UnauthorizedError("Not a member of this team")


def resolve_team_group_owner(session: Session, *, node_id: int, user_id: int) -> int:
    """Return the team owning team group ``node_id`` after checking membership."""

    node = GroupRepository(session, GroupScope.TEAM).get(node_id)
    if node is None:
        raise NotFoundError("Group not found")
    ensure_team_member(session, team_id=node.owner_id, user_id=user_id)
    return node.owner_id


__all__ = [
    "ensure_group_kind",
    "ensure_order",
    "ensure_team_member",
    "normalize_group_name",
    "resolve_team_group_owner",
]
