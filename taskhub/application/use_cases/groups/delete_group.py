"""Use case for deleting a group together with its whole subtree."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from taskhub.domain.entities import GroupScope
from taskhub.domain.exceptions import NotFoundError
from taskhub.infrastructure.repositories import GroupRepository

logger = logging.getLogger(__name__)


def delete_group(
    session: Session, *, scope: GroupScope, node_id: int, owner_id: int
) -> list[int]:
    """Delete ``node_id`` and every descendant; return the removed ids.

    Descendants go first (deepest before their parents), then the node is
    detached from its parent's ``child_ids``, then the node itself is deleted.
    Each step is its own commit: an error halfway leaves the rows written so
    far in place and propagates to the caller.
    """

    repository = GroupRepository(session, scope)
    node = repository.get(node_id, owner_id=owner_id)
    if node is None:
        raise NotFoundError("Group not found")

    discovered: list[int] = []
    pending = [node.id]
    while pending:
        current = pending.pop()
        for child in repository.list_children(owner_id, current):
            discovered.append(child.id)
            pending.append(child.id)

    removed: list[int] = []
    for descendant_id in reversed(discovered):
        repository.delete(descendant_id)
        removed.append(descendant_id)

    if node.parent_id is not None:
        repository.remove_child_id(node.parent_id, node.id)
    repository.delete(node.id)
    removed.append(node.id)

    logger.info(
        "Deleted %s group %s with %d descendants", repository.scope.value, node.id, len(discovered)
    )
    return removed


__all__ = ["delete_group"]
