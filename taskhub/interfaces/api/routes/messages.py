"""Routes for reading team messages and their read state."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskhub.application.use_cases.messages import (
    count_unread_messages,
    list_team_messages,
    list_user_messages,
    mark_message_read,
)
from taskhub.domain.entities import User
from taskhub.domain.exceptions import TaskhubError
from taskhub.infrastructure.database import get_db
from taskhub.interfaces.api.dependencies import get_current_active_user
from taskhub.interfaces.api.routes_helpers import http_error_from, message_to_read
from taskhub.interfaces.api.schemas import MessageRead, UnreadCountRead

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/", response_model=list[MessageRead])
def list_messages(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[MessageRead]:
    """Return the messages of every team the caller belongs to, newest first."""

    messages = list_user_messages(db, user_id=current_user.id)
    return [message_to_read(message) for message in messages]


@router.get("/unread/count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    return UnreadCountRead(unread_count=count_unread_messages(db, user_id=current_user.id))


@router.get("/{team_id}", response_model=list[MessageRead])
def list_messages_for_team(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[MessageRead]:
    try:
        messages = list_team_messages(db, team_id=team_id, user_id=current_user.id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return [message_to_read(message) for message in messages]


@router.patch("/{message_id}/read", response_model=MessageRead)
def mark_read(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageRead:
    try:
        message = mark_message_read(db, message_id=message_id, user_id=current_user.id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return message_to_read(message)
