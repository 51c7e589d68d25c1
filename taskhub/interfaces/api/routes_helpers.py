"""Helper utilities shared across API route handlers."""

import logging

from fastapi import HTTPException, status

from taskhub.domain.entities import GroupNode, GroupTreeNode, Message, Task, metadata_to_dict
from taskhub.domain.exceptions import (
    AuthenticationError,
    DispatchFailure,
    NotFoundError,
    TaskhubError,
    UnauthorizedError,
    ValidationError,
)
from taskhub.interfaces.api.schemas import GroupRead, MessageRead, TaskRead

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[TaskhubError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UnauthorizedError, status.HTTP_403_FORBIDDEN),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (DispatchFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def http_error_from(exc: TaskhubError) -> HTTPException:
    """Return the :class:`HTTPException` matching a domain error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.error("Request failed: %s", exc)
            return HTTPException(status_code=status_code, detail=str(exc))
    logger.error("Unmapped domain error: %r", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error"
    )


def group_to_read(node: GroupNode, children: list[GroupRead] | None = None) -> GroupRead:
    return GroupRead(
        id=node.id or 0,
        name=node.name,
        kind=node.kind,
        scope=node.scope.value,
        owner_id=node.owner_id,
        parent_id=node.parent_id,
        child_ids=list(node.child_ids),
        order=node.order,
        color=node.color,
        icon=node.icon,
        collapsed=node.collapsed,
        created_by=node.created_by,
        created_at=node.created_at,
        updated_at=node.updated_at,
        children=children or [],
    )


def tree_to_read(branch: GroupTreeNode) -> GroupRead:
    return group_to_read(branch.node, [tree_to_read(child) for child in branch.children])


def message_to_read(message: Message) -> MessageRead:
    return MessageRead(
        id=message.id or 0,
        team_id=message.team_id,
        actor_user_id=message.actor_user_id,
        event_type=message.event_type.value,
        content=message.content,
        metadata=metadata_to_dict(message.metadata),
        priority=message.priority.value,
        message_kind=message.message_kind.value,
        is_read=message.is_read,
        created_at=message.created_at,
        read_at=message.read_at,
    )


def task_to_read(task: Task) -> TaskRead:
    return TaskRead(
        id=task.id or 0,
        title=task.title,
        team_id=task.team_id,
        group=task.group,
        team_group=task.team_group,
    )


__all__ = [
    "group_to_read",
    "http_error_from",
    "message_to_read",
    "task_to_read",
    "tree_to_read",
]
