"""Use case for reading a grouping tree with its children populated."""

from __future__ import annotations

from sqlalchemy.orm import Session

from taskhub.domain.entities import GroupScope, GroupTreeNode
from taskhub.infrastructure.repositories import GroupRepository


def list_group_tree(
    session: Session, *, scope: GroupScope, owner_id: int
) -> list[GroupTreeNode]:
    """Return the top-level nodes of the owner's tree, children nested.

    Linkage is rebuilt from ``parent_id``. Siblings keep the repository order
    (``order`` then id). Nodes whose parent no longer exists are unreachable
    and therefore omitted.
    """

    nodes = GroupRepository(session, scope).list_for_owner(owner_id)
    branches = {node.id: GroupTreeNode(node=node) for node in nodes}

    roots: list[GroupTreeNode] = []
    for node in nodes:
        branch = branches[node.id]
        if node.parent_id is None:
            roots.append(branch)
            continue
        parent = branches.get(node.parent_id)
        if parent is not None:
            parent.children.append(branch)
    return roots


__all__ = ["list_group_tree"]
