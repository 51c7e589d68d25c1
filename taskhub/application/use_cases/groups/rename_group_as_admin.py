"""Administrative rename of a personal group, relabeling its tasks."""

from __future__ import annotations

from dataclasses import dataclass, replace

from sqlalchemy.orm import Session

from taskhub.domain.entities import GroupNode, GroupScope
from taskhub.domain.exceptions import NotFoundError, ValidationError
from taskhub.infrastructure.repositories import GroupRepository, TaskRepository

from .validators import normalize_group_name


@dataclass(frozen=True)
class GroupRenameResult:
    group: GroupNode
    relabeled_tasks: int


def rename_group_as_admin(
    session: Session, *, node_id: int, new_name: str
) -> GroupRenameResult:
    """Rename a personal group and rewrite task labels that equal its old name.

    Tasks created by end users reference their group by id, so only tasks
    that carry the group *name* are relabeled here.
    """

    clean_name = normalize_group_name(new_name)
    repository = GroupRepository(session, GroupScope.PERSONAL)
    node = repository.get(node_id)
    if node is None:
        raise NotFoundError("Group not found")
    if clean_name == node.name:
        return GroupRenameResult(group=node, relabeled_tasks=0)
    if repository.find_by_name(node.owner_id, clean_name, exclude_id=node.id) is not None:
        raise ValidationError("Group name already exists")

    relabeled = TaskRepository(session).relabel_group(node.name, clean_name)
    renamed = repository.update(replace(node, name=clean_name))
    return GroupRenameResult(group=renamed, relabeled_tasks=relabeled)


__all__ = ["GroupRenameResult", "rename_group_as_admin"]
