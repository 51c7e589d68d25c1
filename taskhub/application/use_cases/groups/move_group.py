"""Use case for reordering a group or moving it under another parent."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from taskhub.domain.entities import GroupNode, GroupScope
from taskhub.domain.exceptions import NotFoundError, ValidationError
from taskhub.infrastructure.repositories import GroupRepository

from .validators import ensure_order


class _KeepParent:
    def __repr__(self) -> str:
        return "KEEP_PARENT"


KEEP_PARENT = _KeepParent()


def move_group(
    session: Session,
    *,
    scope: GroupScope,
    node_id: int,
    owner_id: int,
    new_order: int,
    new_parent_id: int | None | _KeepParent = KEEP_PARENT,
) -> GroupNode:
    """Set the group's ``order`` and, when given, its new parent.

    ``new_parent_id=None`` makes the group top-level; leaving it as
    :data:`KEEP_PARENT` only changes ``order``. Sibling orders are not
    renumbered.
    """

    ensure_order(new_order)
    repository = GroupRepository(session, scope)
    node = repository.get(node_id, owner_id=owner_id)
    if node is None:
        raise NotFoundError("Group not found")

    if new_parent_id is KEEP_PARENT:
        return repository.update(replace(node, order=new_order))

    if new_parent_id is not None:
        parent = repository.get(new_parent_id, owner_id=owner_id)
        if parent is None:
            raise NotFoundError("Parent group not found")
        _ensure_not_within(repository, node, parent)

    if node.parent_id is not None:
        repository.remove_child_id(node.parent_id, node.id)
    moved = repository.update(replace(node, parent_id=new_parent_id, order=new_order))
    if new_parent_id is not None:
        repository.insert_child_id(new_parent_id, node.id, position=new_order)
    return moved


def _ensure_not_within(
    repository: GroupRepository, node: GroupNode, target: GroupNode
) -> None:
    """Reject moves that would make ``node`` its own ancestor."""

    seen: set[int] = set()
    current: GroupNode | None = target
    while current is not None and current.id not in seen:
        if current.id == node.id:
            raise ValidationError("A group cannot be moved under itself or its descendants")
        seen.add(current.id)
        if current.parent_id is None:
            return
        current = repository.get(current.parent_id, owner_id=node.owner_id)


__all__ = ["KEEP_PARENT", "move_group"]
