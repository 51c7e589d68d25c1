"""Use case for adding a node to a grouping tree."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from taskhub.domain.entities import (
    DEFAULT_GROUP_COLOR,
    DEFAULT_GROUP_ICON,
    GROUP_KIND_CUSTOM,
    GroupNode,
    GroupScope,
)
from taskhub.domain.exceptions import NotFoundError
from taskhub.infrastructure.repositories import GroupRepository

from .validators import ensure_group_kind, normalize_group_name

logger = logging.getLogger(__name__)


def create_group(
    session: Session,
    *,
    scope: GroupScope,
    owner_id: int,
    name: str,
    created_by: int | None = None,
    parent_id: int | None = None,
    kind: str = GROUP_KIND_CUSTOM,
    color: str | None = None,
    icon: str | None = None,
) -> GroupNode:
    """Create a node as the last sibling under ``parent_id`` (or at the top)."""

    clean_name = normalize_group_name(name)
    ensure_group_kind(kind)

    repository = GroupRepository(session, scope)
    if parent_id is not None and repository.get(parent_id, owner_id=owner_id) is None:
        raise NotFoundError("Parent group not found")

    node = repository.create(
        GroupNode(
            id=None,
            scope=repository.scope,
            owner_id=owner_id,
            name=clean_name,
            kind=kind,
            parent_id=parent_id,
            order=repository.count_children(owner_id, parent_id),
            color=color or DEFAULT_GROUP_COLOR,
            icon=icon or DEFAULT_GROUP_ICON,
            created_by=created_by,
        )
    )
    if parent_id is not None:
        repository.insert_child_id(parent_id, node.id)

    logger.info(
        "Created %s group %s for owner %s under %s",
        repository.scope.value,
        node.id,
        owner_id,
        parent_id,
    )
    return node


__all__ = ["create_group"]
