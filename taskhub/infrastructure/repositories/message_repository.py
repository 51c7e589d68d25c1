"""Persistence helpers for message entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import desc, false
from sqlalchemy.orm import Session

from taskhub.domain.entities import (
    EventCatalog,
    EventType,
    Message,
    MessageKind,
    Priority,
    metadata_from_dict,
    metadata_to_dict,
)
from taskhub.infrastructure.models import MessageModel
from taskhub.utils import ensure_app_timezone, to_storage_datetime


class MessageRepository:
    """Provide create, read-state and purge operations for :class:`Message`."""

    def __init__(self, session: Session, catalog: EventCatalog | None = None) -> None:
        self.session = session
        self.catalog = catalog or EventCatalog.default()

    def get(self, message_id: int) -> Message | None:
        model = self.session.get(MessageModel, message_id)
        return self._to_entity(model) if model else None

    def list_for_team(self, team_id: int) -> Sequence[Message]:
        return self.list_for_teams([team_id])

    def list_for_teams(self, team_ids: Iterable[int]) -> Sequence[Message]:
        ids = list(team_ids)
        if not ids:
            return []
        query = (
            self.session.query(MessageModel)
            .filter(MessageModel.team_id.in_(ids))
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def search(
        self,
        *,
        team_id: int | None = None,
        event_type: EventType | None = None,
        is_read: bool | None = None,
        priority: Priority | None = None,
        text: str | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> tuple[list[Message], int]:
        """Return one page of messages matching the filters, and the total match count."""

        query = self.session.query(MessageModel)
        if team_id is not None:
            query = query.filter(MessageModel.team_id == team_id)
        if event_type is not None:
            query = query.filter(MessageModel.event_type == EventType(event_type).value)
        if is_read is not None:
            query = query.filter(MessageModel.is_read == is_read)
        if priority is not None:
            query = query.filter(MessageModel.priority == Priority(priority).value)
        if text:
            query = query.filter(MessageModel.content.ilike(f"%{text}%"))

        total = query.count()
        query = query.order_by(desc(MessageModel.created_at), desc(MessageModel.id))
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def count_unread_for_teams(self, team_ids: Iterable[int]) -> int:
        ids = list(team_ids)
        if not ids:
            return 0
        return (
            self.session.query(MessageModel)
            .filter(MessageModel.team_id.in_(ids))
            .filter(MessageModel.is_read == false())
            .count()
        )

    def create_many(self, messages: Sequence[Message]) -> list[Message]:
        models = []
        for message in messages:
            model = MessageModel()
            self._apply_entity_to_model(model, message)
            models.append(model)
        self.session.add_all(models)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def mark_read(self, message_id: int, read_at: datetime) -> Message:
        """Set the read flag unless it is already set; ``read_at`` never moves."""

        model = self.session.get(MessageModel, message_id)
        if model is None:
            msg = f"Message with id {message_id} not found"
            raise ValueError(msg)
        if not model.is_read:
            model.is_read = True
            model.read_at = to_storage_datetime(read_at)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_unread(self, message_id: int) -> Message:
        """Clear the read flag and ``read_at``."""

        model = self.session.get(MessageModel, message_id)
        if model is None:
            msg = f"Message with id {message_id} not found"
            raise ValueError(msg)
        if model.is_read or model.read_at is not None:
            model.is_read = False
            model.read_at = None
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def delete_many(self, message_ids: Iterable[int]) -> int:
        ids = [message_id for message_id in message_ids if message_id is not None]
        if not ids:
            return 0
        deleted = (
            self.session.query(MessageModel)
            .filter(MessageModel.id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def delete_created_before(self, cutoff: datetime) -> int:
        deleted = (
            self.session.query(MessageModel)
            .filter(MessageModel.created_at < to_storage_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _apply_entity_to_model(model: MessageModel, message: Message) -> None:
        model.team_id = message.team_id
        model.actor_user_id = message.actor_user_id
        model.event_type = EventType(message.event_type).value
        model.content = message.content
        model.metadata_json = metadata_to_dict(message.metadata)
        model.priority = Priority(message.priority).value
        model.message_kind = MessageKind(message.message_kind).value
        model.is_read = message.is_read
        if message.created_at is not None:
            model.created_at = to_storage_datetime(message.created_at)
        model.read_at = to_storage_datetime(message.read_at)

    def _to_entity(self, model: MessageModel) -> Message:
        definition = self.catalog.get(model.event_type)
        return Message(
            id=model.id,
            team_id=model.team_id,
            actor_user_id=model.actor_user_id,
            event_type=definition.event_type,
            content=model.content,
            metadata=metadata_from_dict(definition.metadata_type, model.metadata_json),
            priority=Priority(model.priority),
            message_kind=MessageKind(model.message_kind),
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["MessageRepository"]
