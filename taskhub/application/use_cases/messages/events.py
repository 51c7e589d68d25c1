"""Helpers that keep notification failures out of the enclosing action.

Team, task and membership code call these after their own write succeeded;
a message that cannot be recorded is logged and the action still completes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from taskhub.domain.entities import Message
from taskhub.domain.exceptions import DispatchFailure

from .dispatcher import MessageDispatcher

logger = logging.getLogger(__name__)


@contextmanager
def isolate_dispatch_failure(description: str) -> Iterator[None]:
    """Log and suppress :class:`DispatchFailure` raised inside the block."""

    try:
        yield
    except DispatchFailure:
        logger.exception("Notification '%s' could not be recorded", description)


def notify_member_join_quietly(
    dispatcher: MessageDispatcher, *, team_id: int, member_id: int, operator_id: int | None = None
) -> Message | None:
    with isolate_dispatch_failure("member_join"):
        return dispatcher.notify_member_join(
            team_id=team_id, member_id=member_id, operator_id=operator_id
        )
    return None


def notify_member_leave_quietly(
    dispatcher: MessageDispatcher,
    *,
    team_id: int,
    member_id: int,
    operator_id: int | None = None,
    removed: bool = False,
) -> Message | None:
    with isolate_dispatch_failure("member_removed" if removed else "member_leave"):
        return dispatcher.notify_member_leave(
            team_id=team_id, member_id=member_id, operator_id=operator_id, removed=removed
        )
    return None


def notify_role_change_quietly(
    dispatcher: MessageDispatcher,
    *,
    team_id: int,
    target_user_id: int,
    old_role: str,
    new_role: str,
    operator_id: int | None = None,
) -> Message | None:
    with isolate_dispatch_failure("role_change"):
        return dispatcher.notify_role_change(
            team_id=team_id,
            target_user_id=target_user_id,
            old_role=old_role,
            new_role=new_role,
            operator_id=operator_id,
        )
    return None


def notify_permission_change_quietly(
    dispatcher: MessageDispatcher,
    *,
    team_id: int,
    target_user_id: int,
    permission: str,
    granted: bool,
    operator_id: int | None = None,
) -> Message | None:
    with isolate_dispatch_failure("permission_change"):
        return dispatcher.notify_permission_change(
            team_id=team_id,
            target_user_id=target_user_id,
            permission=permission,
            granted=granted,
            operator_id=operator_id,
        )
    return None


def notify_team_deleted_quietly(
    dispatcher: MessageDispatcher,
    *,
    team_id: int,
    team_name: str,
    operator_id: int | None,
    member_ids: list[int],
) -> list[Message]:
    with isolate_dispatch_failure("team_deleted"):
        return dispatcher.notify_team_deleted(
            team_id=team_id,
            team_name=team_name,
            operator_id=operator_id,
            member_ids=member_ids,
        )
    return []


def notify_task_assigned_quietly(
    dispatcher: MessageDispatcher,
    *,
    team_id: int,
    task_id: int,
    task_title: str,
    assignee_id: int,
    operator_id: int | None = None,
) -> Message | None:
    with isolate_dispatch_failure("task_assigned"):
        return dispatcher.notify_task_assigned(
            team_id=team_id,
            task_id=task_id,
            task_title=task_title,
            assignee_id=assignee_id,
            operator_id=operator_id,
        )
    return None


def notify_mention_quietly(
    dispatcher: MessageDispatcher,
    *,
    team_id: int,
    task_id: int,
    task_title: str,
    mentioned_user_id: int,
    mentioner_id: int,
) -> Message | None:
    with isolate_dispatch_failure("mention"):
        return dispatcher.notify_mention(
            team_id=team_id,
            task_id=task_id,
            task_title=task_title,
            mentioned_user_id=mentioned_user_id,
            mentioner_id=mentioner_id,
        )
    return None


def record_audit_log_quietly(
    dispatcher: MessageDispatcher,
    *,
    team_id: int,
    action: str,
    description: str,
    operator_id: int,
) -> Message | None:
    with isolate_dispatch_failure("audit_log"):
        return dispatcher.record_audit_log(
            team_id=team_id, action=action, description=description, operator_id=operator_id
        )
    return None


__all__ = [
    "isolate_dispatch_failure",
    "notify_member_join_quietly",
    "notify_member_leave_quietly",
    "notify_mention_quietly",
    "notify_permission_change_quietly",
    "notify_role_change_quietly",
    "notify_task_assigned_quietly",
    "notify_team_deleted_quietly",
    "record_audit_log_quietly",
]
