"""Administrative removal of stored messages."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from taskhub.domain.exceptions import NotFoundError, ValidationError
from taskhub.infrastructure.repositories import MessageRepository
from taskhub.utils import storage_cutoff

logger = logging.getLogger(__name__)


def purge_message(session: Session, *, message_id: int) -> None:
    repository = MessageRepository(session)
    if repository.get(message_id) is None:
        raise NotFoundError("Message not found")
    repository.delete_many([message_id])


def purge_messages(session: Session, *, message_ids: Sequence[int]) -> int:
    """Delete the given messages and return how many existed."""

    if not message_ids:
        raise ValidationError("Message IDs are required")
    deleted = MessageRepository(session).delete_many(message_ids)
    logger.info("Purged %d of %d requested messages", deleted, len(message_ids))
    return deleted


def purge_messages_older_than(session: Session, *, days: int) -> int:
    """Delete messages created more than ``days`` days ago."""

    if days is None or days < 1:
        raise ValidationError("olderThanDays must be a positive integer")
    deleted = MessageRepository(session).delete_created_before(storage_cutoff(days))
    logger.info("Purged %d messages older than %d days", deleted, days)
    return deleted


__all__ = ["purge_message", "purge_messages", "purge_messages_older_than"]
