"""Domain entity representing a persisted team notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .event_catalog import EventType
from .message_metadata import MessageKind, MessageMetadata, Priority


@dataclass
class Message:
    """A state-change event recorded for a team.

    Only ``is_read`` and ``read_at`` change after creation. ``team_id`` is
    ``None`` for administrative broadcasts, which are addressed to a single
    recipient through ``metadata.target_user_id`` instead.
    """

    id: int | None
    team_id: int | None
    actor_user_id: int | None
    event_type: EventType
    content: str
    metadata: MessageMetadata
    priority: Priority
    message_kind: MessageKind
    is_read: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def recipient_id(self) -> int | None:
        return getattr(self.metadata, "target_user_id", None)


@dataclass(frozen=True)
class MessageDraft:
    """Everything needed to persist a message; defaults come from the catalog."""

    team_id: int | None
    event_type: EventType
    content: str
    metadata: MessageMetadata
    actor_user_id: int | None = None
    priority: Priority | None = None
    message_kind: MessageKind | None = None


__all__ = ["Message", "MessageDraft"]
