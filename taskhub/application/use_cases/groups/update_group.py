"""Use case for renaming, recoloring or collapsing a group."""

from dataclasses import replace

from sqlalchemy.orm import Session

from taskhub.domain.entities import GroupNode, GroupScope
from taskhub.domain.exceptions import NotFoundError
from taskhub.infrastructure.repositories import GroupRepository

from .validators import normalize_group_name


def update_group(
    session: Session,
    *,
    scope: GroupScope,
    node_id: int,
    owner_id: int,
    name: str | None = None,
    color: str | None = None,
    icon: str | None = None,
    collapsed: bool | None = None,
) -> GroupNode:
    """Apply the provided fields to the group; ``None`` leaves a field as is.

    ``system`` groups are updated like any other group.
    """

    repository = GroupRepository(session, scope)
    current = repository.get(node_id, owner_id=owner_id)
    if current is None:
        raise NotFoundError("Group not found")

    updated = replace(
        current,
        name=normalize_group_name(name) if name is not None else current.name,
        color=color if color is not None else current.color,
        icon=icon if icon is not None else current.icon,
        collapsed=collapsed if collapsed is not None else current.collapsed,
    )
    return repository.update(updated)
