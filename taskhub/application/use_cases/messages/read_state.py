"""Read-state queries and the mark-as-read transition for team messages."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from taskhub.domain.entities import Message
from taskhub.domain.exceptions import NotFoundError, UnauthorizedError
from taskhub.infrastructure.repositories import MessageRepository, TeamRepository
from taskhub.utils import now_in_app_timezone


def mark_message_read(session: Session, *, message_id: int, user_id: int) -> Message:
    """Mark ``message_id`` as read on behalf of ``user_id``.

    The caller must belong to the message's team, or be the recipient of a
    broadcast record. A message that is already read is returned unchanged.
    """

    repository = MessageRepository(session)
    message = repository.get(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    _ensure_can_read(session, message, user_id)
    if message.is_read:
        return message
    return repository.mark_read(message_id, now_in_app_timezone())


def count_unread_messages(session: Session, *, user_id: int) -> int:
    """Count unread messages across the teams ``user_id`` belongs to now."""

    team_ids = TeamRepository(session).list_team_ids_for_user(user_id)
    return MessageRepository(session).count_unread_for_teams(team_ids)


def list_team_messages(session: Session, *, team_id: int, user_id: int) -> Sequence[Message]:
    teams = TeamRepository(session)
    if teams.get(team_id) is None:
        raise NotFoundError("Team not found")
    if not teams.is_member(team_id, user_id):
        raise UnauthorizedError("Not authorized to view this team's messages")
    return MessageRepository(session).list_for_team(team_id)


def list_user_messages(session: Session, *, user_id: int) -> Sequence[Message]:
    team_ids = TeamRepository(session).list_team_ids_for_user(user_id)
    return MessageRepository(session).list_for_teams(team_ids)


def _ensure_can_read(session: Session, message: Message, user_id: int) -> None:
    if message.team_id is None:
        if message.recipient_id != user_id:
            raise UnauthorizedError("Not authorized to update this message")
        return
    if not TeamRepository(session).is_member(message.team_id, user_id):
        raise UnauthorizedError("Not authorized to update this message")


__all__ = [
    "count_unread_messages",
    "list_team_messages",
    "list_user_messages",
    "mark_message_read",
]
