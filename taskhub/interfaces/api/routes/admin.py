"""Administrative console routes: message browser, broadcasts, purge and groups."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskhub.application.use_cases.groups import (
    GroupPage,
    browse_groups,
    get_group_detail,
    rename_group_as_admin,
)
from taskhub.application.use_cases.messages import (
    MAX_PAGE_SIZE,
    MessageDispatcher,
    browse_messages,
    get_message,
    purge_message,
    purge_messages,
    purge_messages_older_than,
    set_message_read_state,
)
from taskhub.domain.entities import EventCatalog, GroupScope, User
from taskhub.domain.exceptions import TaskhubError
from taskhub.infrastructure.database import get_db
from taskhub.interfaces.api.dependencies import (
    get_event_catalog,
    get_message_dispatcher,
    require_admin,
)
from taskhub.interfaces.api.routes_helpers import (
    group_to_read,
    http_error_from,
    message_to_read,
    task_to_read,
)
from taskhub.interfaces.api.schemas import (
    BroadcastCreate,
    BroadcastRecipient,
    BroadcastResult,
    GroupDetailRead,
    GroupPageRead,
    GroupRename,
    GroupRenameResult,
    GroupSummaryRead,
    MessageBatchDelete,
    MessagePageRead,
    MessagePurgeResult,
    MessageRead,
    MessageReadState,
)

router = APIRouter(prefix="/admin", tags=["admin"])


def _group_page_to_read(page: GroupPage) -> GroupPageRead:
    return GroupPageRead(
        items=[
            GroupSummaryRead(group=group_to_read(item.group), task_count=item.task_count)
            for item in page.items
        ],
        total=page.total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/messages", response_model=MessagePageRead)
def list_messages(
    team_id: int | None = Query(default=None, alias="teamId"),
    event_type: str | None = Query(default=None, alias="eventType"),
    is_read: bool | None = Query(default=None, alias="isRead"),
    priority: str | None = Query(default=None),
    search: str | None = Query(default=None),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    catalog: EventCatalog = Depends(get_event_catalog),
    _: User = Depends(require_admin),
) -> MessagePageRead:
    """Browse every stored message, newest first."""

    try:
        page = browse_messages(
            db,
            team_id=team_id,
            event_type=event_type,
            is_read=is_read,
            priority=priority,
            search=search,
            skip=skip,
            limit=limit,
            catalog=catalog,
        )
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return MessagePageRead(
        items=[message_to_read(message) for message in page.items],
        total=page.total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/messages/{message_id}", response_model=MessageRead)
def read_message(
    message_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageRead:
    try:
        message = get_message(db, message_id=message_id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return message_to_read(message)


@router.put("/messages/{message_id}/read", response_model=MessageRead)
def update_message_read_state(
    message_id: int,
    payload: MessageReadState | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageRead:
    is_read = payload.is_read if payload is not None else True
    try:
        message = set_message_read_state(db, message_id=message_id, is_read=is_read)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return message_to_read(message)


@router.post("/messages/broadcast", response_model=BroadcastResult)
def send_broadcast(
    payload: BroadcastCreate,
    dispatcher: MessageDispatcher = Depends(get_message_dispatcher),
    current_user: User = Depends(require_admin),
) -> BroadcastResult:
    """Record a ``system_broadcast`` message for each recipient and push it."""

    try:
        result = dispatcher.broadcast(
            title=payload.title,
            content=payload.content,
            target_type=payload.target_type,
            target_ids=payload.target_ids,
            sent_by=current_user.id,
        )
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return BroadcastResult(
        message=f"Broadcast sent to {result.recipient_count} recipients",
        recipient_count=result.recipient_count,
        recipients=[
            BroadcastRecipient(id=user.id, name=user.display_name())
            for user in result.recipients
        ],
    )


@router.delete("/messages/{message_id}", response_model=MessagePurgeResult)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessagePurgeResult:
    try:
        purge_message(db, message_id=message_id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return MessagePurgeResult(message="Message deleted successfully", deleted_count=1)


@router.post("/messages/batch-delete", response_model=MessagePurgeResult)
def batch_delete_messages(
    payload: MessageBatchDelete,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessagePurgeResult:
    try:
        deleted = purge_messages(db, message_ids=payload.message_ids)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return MessagePurgeResult(
        message=f"{deleted} messages deleted successfully", deleted_count=deleted
    )


@router.delete("/messages", response_model=MessagePurgeResult)
def delete_old_messages(
    older_than_days: int = Query(..., alias="olderThanDays"),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessagePurgeResult:
    try:
        deleted = purge_messages_older_than(db, days=older_than_days)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return MessagePurgeResult(
        message=f"{deleted} messages deleted successfully", deleted_count=deleted
    )


@router.get("/groups", response_model=GroupPageRead)
def list_groups(
    owner_id: int | None = Query(default=None, alias="ownerId"),
    search: str | None = Query(default=None),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> GroupPageRead:
    """List personal groups of every user with their task counts."""

    try:
        page = browse_groups(
            db,
            scope=GroupScope.PERSONAL,
            owner_id=owner_id,
            search=search,
            skip=skip,
            limit=limit,
        )
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return _group_page_to_read(page)


@router.get("/groups/team-groups", response_model=GroupPageRead)
def list_team_groups(
    team_id: int | None = Query(default=None, alias="teamId"),
    search: str | None = Query(default=None),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> GroupPageRead:
    try:
        page = browse_groups(
            db,
            scope=GroupScope.TEAM,
            owner_id=team_id,
            search=search,
            skip=skip,
            limit=limit,
        )
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return _group_page_to_read(page)


@router.get("/groups/team-groups/{group_id}", response_model=GroupDetailRead)
def read_team_group(
    group_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> GroupDetailRead:
    try:
        detail = get_group_detail(db, scope=GroupScope.TEAM, node_id=group_id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return GroupDetailRead(
        group=group_to_read(detail.group), tasks=[task_to_read(task) for task in detail.tasks]
    )


@router.get("/groups/{group_id}", response_model=GroupDetailRead)
def read_group(
    group_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> GroupDetailRead:
    """Return a personal group and the tasks filed under its name."""

    try:
        detail = get_group_detail(db, scope=GroupScope.PERSONAL, node_id=group_id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return GroupDetailRead(
        group=group_to_read(detail.group), tasks=[task_to_read(task) for task in detail.tasks]
    )


@router.put("/groups/{group_id}", response_model=GroupRenameResult)
def rename_group(
    group_id: int,
    payload: GroupRename,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> GroupRenameResult:
    """Rename a user's group and relabel the tasks filed under its old name."""

    try:
        result = rename_group_as_admin(db, node_id=group_id, new_name=payload.name)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return GroupRenameResult(
        group=group_to_read(result.group), relabeled_tasks=result.relabeled_tasks
    )
