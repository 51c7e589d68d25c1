"""Administrative browsing of stored messages across every team."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from taskhub.domain.entities import EventCatalog, Message, Priority
from taskhub.domain.exceptions import NotFoundError, ValidationError
from taskhub.infrastructure.repositories import MessageRepository
from taskhub.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


@dataclass
class MessagePage:
    items: list[Message] = field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = MAX_PAGE_SIZE


def browse_messages(
    session: Session,
    *,
    team_id: int | None = None,
    event_type: str | None = None,
    is_read: bool | None = None,
    priority: str | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 20,
    catalog: EventCatalog | None = None,
) -> MessagePage:
    """Return a page of messages matching the optional filters, newest first.

    Broadcast records have no team and only show up when ``team_id`` is not
    given.
    """

    if skip < 0:
        raise ValidationError("skip must not be negative")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

    catalog = catalog or EventCatalog.default()
    resolved_event = catalog.resolve(event_type) if event_type else None
    resolved_priority = None
    if priority:
        try:
            resolved_priority = Priority(priority)
        except ValueError as exc:
            raise ValidationError(f"Unknown priority '{priority}'") from exc

    items, total = MessageRepository(session, catalog).search(
        team_id=team_id,
        event_type=resolved_event,
        is_read=is_read,
        priority=resolved_priority,
        text=(search or "").strip() or None,
        skip=skip,
        limit=limit,
    )
    return MessagePage(items=items, total=total, skip=skip, limit=limit)


def get_message(session: Session, *, message_id: int) -> Message:
    message = MessageRepository(session).get(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    return message


def set_message_read_state(session: Session, *, message_id: int, is_read: bool = True) -> Message:
    """Force the read flag of any message, without the membership check.

    Marking an already-read message read keeps its ``read_at``; marking it
    unread clears ``read_at``.
    """

    repository = MessageRepository(session)
    if repository.get(message_id) is None:
        raise NotFoundError("Message not found")
    if is_read:
        return repository.mark_read(message_id, now_in_app_timezone())
    logger.info("Message %s reset to unread by an administrator", message_id)
    return repository.mark_unread(message_id)


__all__ = [
    "MAX_PAGE_SIZE",
    "MessagePage",
    "browse_messages",
    "get_message",
    "set_message_read_state",
]
