"""Administrative listing and lookup of groups across all owners."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from taskhub.domain.entities import GroupNode, GroupScope, Task
from taskhub.domain.exceptions import NotFoundError, ValidationError
from taskhub.infrastructure.repositories import GroupRepository, TaskRepository

MAX_PAGE_SIZE = 100


@dataclass
class GroupSummary:
    group: GroupNode
    task_count: int = 0


@dataclass
class GroupPage:
    items: list[GroupSummary] = field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = MAX_PAGE_SIZE


@dataclass
class GroupDetail:
    group: GroupNode
    tasks: list[Task] = field(default_factory=list)


def browse_groups(
    session: Session,
    *,
    scope: GroupScope,
    owner_id: int | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 20,
) -> GroupPage:
    """Return a page of groups with the number of tasks filed under each.

    Personal groups count every task whose ``group`` equals the group name;
    team groups count the owning team's tasks whose ``team_group`` matches.
    """

    if skip < 0:
        raise ValidationError("skip must not be negative")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

    groups, total = GroupRepository(session, scope).search(
        owner_id=owner_id,
        text=(search or "").strip() or None,
        skip=skip,
        limit=limit,
    )
    tasks = TaskRepository(session)
    if GroupScope(scope) is GroupScope.PERSONAL:
        counts = tasks.count_by_group_labels(group.name for group in groups)
        items = [GroupSummary(group, counts.get(group.name, 0)) for group in groups]
    else:
        items = [
            GroupSummary(group, tasks.count_by_team_group(group.owner_id, group.name))
            for group in groups
        ]
    return GroupPage(items=items, total=total, skip=skip, limit=limit)


def get_group_detail(session: Session, *, scope: GroupScope, node_id: int) -> GroupDetail:
    group = GroupRepository(session, scope).get(node_id)
    if group is None:
        raise NotFoundError("Group not found")
    tasks = TaskRepository(session)
    if group.scope is GroupScope.PERSONAL:
        filed = tasks.list_by_group_label(group.name)
    else:
        filed = tasks.list_by_team_group(group.owner_id, group.name)
    return GroupDetail(group=group, tasks=list(filed))


__all__ = [
    "GroupDetail",
    "GroupPage",
    "GroupSummary",
    "browse_groups",
    "get_group_detail",
]
