"""Schemas for message, read-state and administrative message endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel


class MessageRead(CamelModel):
    id: int
    team_id: int | None = None
    actor_user_id: int | None = None
    event_type: str
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    priority: str
    message_kind: str = Field(alias="messageType")
    is_read: bool
    created_at: datetime | None = None
    read_at: datetime | None = None


class MessagePageRead(CamelModel):
    items: list[MessageRead]
    total: int
    skip: int
    limit: int


class MessageReadState(CamelModel):
    is_read: bool = True


class UnreadCountRead(CamelModel):
    unread_count: int


class BroadcastCreate(CamelModel):
    title: str = ""
    content: str = ""
    target_type: str = "all"
    target_ids: list[int] = Field(default_factory=list)


class BroadcastRecipient(CamelModel):
    id: int
    name: str


class BroadcastResult(CamelModel):
    message: str
    recipient_count: int
    recipients: list[BroadcastRecipient]


class MessageBatchDelete(CamelModel):
    message_ids: list[int] = Field(default_factory=list)


class MessagePurgeResult(CamelModel):
    message: str
    deleted_count: int


__all__ = [
    "BroadcastCreate",
    "BroadcastRecipient",
    "BroadcastResult",
    "MessageBatchDelete",
    "MessagePageRead",
    "MessagePurgeResult",
    "MessageRead",
    "MessageReadState",
    "UnreadCountRead",
]
