"""Persist team notifications and push them to the affected users.

Every public ``notify_*`` method follows the same two steps: the message is
written to the database first, then a best-effort push is attempted. A failed
write raises :class:`DispatchFailure`; a failed push is only logged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskhub.domain.entities import (
    TEAM_ROLE_RANKS,
    AuditMetadata,
    BroadcastMetadata,
    EventCatalog,
    EventType,
    MembershipMetadata,
    Message,
    MessageDraft,
    PermissionMetadata,
    RoleChangeMetadata,
    SecurityAlertMetadata,
    TaskMetadata,
    TeamLifecycleMetadata,
    User,
)
from taskhub.domain.exceptions import DispatchFailure, ValidationError
from taskhub.infrastructure.notifications import (
    NotificationPublisher,
    build_notification_payload,
)
from taskhub.infrastructure.repositories import (
    MessageRepository,
    TeamRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown user"
UNKNOWN_TEAM = "Unknown team"

BROADCAST_ALL = "all"
BROADCAST_USERS = "users"
BROADCAST_TEAMS = "teams"
BROADCAST_ADMINS = "admins"
BROADCAST_TARGETS = (BROADCAST_ALL, BROADCAST_USERS, BROADCAST_TEAMS, BROADCAST_ADMINS)


@dataclass
class BroadcastResult:
    messages: list[Message] = field(default_factory=list)
    recipients: list[User] = field(default_factory=list)

    @property
    def recipient_count(self) -> int:
        return len(self.recipients)


def _unique(values: Iterable[int | None]) -> list[int]:
    seen: set[int] = set()
    ordered: list[int] = []
    for value in values:
        if value is None or value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered


class MessageDispatcher:
    """Create :class:`Message` records for domain events.

    ``persist``/``persist_many`` and ``try_push`` are exposed separately so a
    caller can never lose the durable record because a live push failed.
    """

    def __init__(
        self,
        session: Session,
        catalog: EventCatalog | None = None,
        publisher: NotificationPublisher | None = None,
    ) -> None:
        self.session = session
        self.catalog = catalog or EventCatalog.default()
        self.publisher = publisher
        self._messages = MessageRepository(session, self.catalog)
        self._users = UserRepository(session)
        self._teams = TeamRepository(session)

    # ------------------------------------------------------------------
    # Two-step API
    # ------------------------------------------------------------------
    def persist(self, draft: MessageDraft) -> Message:
        """Validate ``draft`` against the catalog and write one message."""

        return self.persist_many([draft])[0]

    def persist_many(self, drafts: Sequence[MessageDraft]) -> list[Message]:
        """Validate and write every draft in a single commit."""

        messages = [self._build(draft) for draft in drafts]
        if not messages:
            return []
        try:
            return self._messages.create_many(messages)
        except SQLAlchemyError as exc:
            self.session.rollback()
            event_types = sorted({message.event_type.value for message in messages})
            logger.exception("Failed to persist %d message(s) of %s", len(messages), event_types)
            raise DispatchFailure(f"Could not record {', '.join(event_types)} notification") from exc

    def try_push(self, user_ids: Iterable[int | None], payload: dict[str, Any]) -> None:
        """Hand ``payload`` to the live channel; delivery problems are logged only."""

        if self.publisher is None:
            return
        recipients = _unique(user_ids)
        if not recipients:
            return
        try:
            self.publisher.try_push(recipients, payload)
        except Exception:  # pragma: no cover - push is best effort
            logger.exception("Realtime push of %s failed", payload.get("type"))

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def notify_member_join(
        self, *, team_id: int, member_id: int, operator_id: int | None = None
    ) -> Message:
        content = (
            f'New member {self._user_label(member_id)} joined team "{self._team_label(team_id)}"'
        )
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.MEMBER_JOIN,
                content=content,
                metadata=MembershipMetadata(target_user_id=member_id, operator_id=operator_id),
                actor_user_id=operator_id,
            ),
            recipients=[member_id],
        )

    def notify_member_leave(
        self,
        *,
        team_id: int,
        member_id: int,
        operator_id: int | None = None,
        removed: bool = False,
    ) -> Message:
        member = self._user_label(member_id)
        team = self._team_label(team_id)
        if removed:
            event_type = EventType.MEMBER_REMOVED
            content = (
                f'Member {member} was removed from team "{team}" '
                f"by {self._user_label(operator_id)}"
            )
        else:
            event_type = EventType.MEMBER_LEAVE
            content = f'Member {member} left team "{team}"'
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=event_type,
                content=content,
                metadata=MembershipMetadata(target_user_id=member_id, operator_id=operator_id),
                actor_user_id=operator_id,
            ),
            recipients=[member_id],
        )

    def notify_role_change(
        self,
        *,
        team_id: int,
        target_user_id: int,
        old_role: str,
        new_role: str,
        operator_id: int | None = None,
    ) -> Message:
        content = (
            f"{self._user_label(target_user_id)}'s role changed from {old_role} to {new_role}"
        )
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=self._role_event(old_role, new_role),
                content=content,
                metadata=RoleChangeMetadata(
                    target_user_id=target_user_id,
                    old_role=old_role,
                    new_role=new_role,
                    operator_id=operator_id,
                ),
                actor_user_id=operator_id,
            ),
            recipients=[target_user_id],
        )

    def notify_permission_change(
        self,
        *,
        team_id: int,
        target_user_id: int,
        permission: str,
        granted: bool,
        operator_id: int | None = None,
    ) -> Message:
        verb = "granted" if granted else "revoked"
        content = f'{self._user_label(target_user_id)}\'s permission "{permission}" was {verb}'
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=(
                    EventType.PERMISSION_GRANTED if granted else EventType.PERMISSION_REVOKED
                ),
                content=content,
                metadata=PermissionMetadata(
                    target_user_id=target_user_id,
                    permission=permission,
                    operator_id=operator_id,
                ),
                actor_user_id=operator_id,
            ),
            recipients=[target_user_id],
        )

    # ------------------------------------------------------------------
    # Team lifecycle
    # ------------------------------------------------------------------
    def notify_team_created(self, *, team_id: int, team_name: str, creator_id: int) -> Message:
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.TEAM_CREATED,
                content=f'Team "{team_name}" was created',
                metadata=TeamLifecycleMetadata(operator_id=creator_id, team_name=team_name),
                actor_user_id=creator_id,
            ),
            recipients=[creator_id],
        )

    def notify_team_updated(
        self, *, team_id: int, team_name: str, operator_id: int | None = None
    ) -> Message:
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.TEAM_UPDATED,
                content=f'Team "{team_name}" was updated',
                metadata=TeamLifecycleMetadata(operator_id=operator_id, team_name=team_name),
                actor_user_id=operator_id,
            ),
            recipients=self._teams.member_ids([team_id]),
        )

    def notify_team_deleted(
        self,
        *,
        team_id: int,
        team_name: str,
        operator_id: int | None,
        member_ids: Iterable[int],
    ) -> list[Message]:
        """Record one ``team_deleted`` message per distinct member."""

        recipients = _unique(member_ids)
        if not recipients:
            return []
        content = f'Team "{team_name}" was deleted by {self._user_label(operator_id)}'
        messages = self.persist_many(
            [
                MessageDraft(
                    team_id=team_id,
                    event_type=EventType.TEAM_DELETED,
                    content=content,
                    metadata=TeamLifecycleMetadata(
                        operator_id=operator_id,
                        team_name=team_name,
                        target_user_id=member_id,
                    ),
                    actor_user_id=operator_id,
                )
                for member_id in recipients
            ]
        )
        self.try_push(
            recipients,
            build_notification_payload(EventType.TEAM_DELETED.value, content, team_id=team_id),
        )
        return messages

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def notify_task_assigned(
        self,
        *,
        team_id: int,
        task_id: int,
        task_title: str,
        assignee_id: int,
        operator_id: int | None = None,
    ) -> Message:
        content = f'Task "{task_title}" was assigned to {self._user_label(assignee_id)}'
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.TASK_ASSIGNED,
                content=content,
                metadata=TaskMetadata(
                    task_id=task_id, target_user_id=assignee_id, operator_id=operator_id
                ),
                actor_user_id=operator_id,
            ),
            recipients=[assignee_id],
            task_id=task_id,
        )

    def notify_task_completed(
        self,
        *,
        team_id: int,
        task_id: int,
        task_title: str,
        completed_by: int,
        notify_user_id: int | None = None,
    ) -> Message:
        content = f'Task "{task_title}" was completed by {self._user_label(completed_by)}'
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.TASK_COMPLETED,
                content=content,
                metadata=TaskMetadata(
                    task_id=task_id, target_user_id=notify_user_id, operator_id=completed_by
                ),
                actor_user_id=completed_by,
            ),
            recipients=[notify_user_id],
            task_id=task_id,
        )

    def notify_task_overdue(
        self,
        *,
        team_id: int,
        task_id: int,
        task_title: str,
        assignee_id: int | None = None,
    ) -> Message:
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.TASK_OVERDUE,
                content=f'Task "{task_title}" is overdue',
                metadata=TaskMetadata(task_id=task_id, target_user_id=assignee_id),
            ),
            recipients=[assignee_id],
            task_id=task_id,
        )

    def notify_mention(
        self,
        *,
        team_id: int,
        task_id: int,
        task_title: str,
        mentioned_user_id: int,
        mentioner_id: int,
    ) -> Message:
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.MENTION,
                content=f'You were mentioned in task "{task_title}"',
                metadata=TaskMetadata(
                    task_id=task_id,
                    target_user_id=mentioned_user_id,
                    operator_id=mentioner_id,
                ),
                actor_user_id=mentioner_id,
            ),
            recipients=[mentioned_user_id],
            task_id=task_id,
        )

    # ------------------------------------------------------------------
    # System
    # ------------------------------------------------------------------
    def record_audit_log(
        self, *, team_id: int, action: str, description: str, operator_id: int
    ) -> Message:
        """Persist an audit entry; audit entries are never pushed."""

        content = (
            f"Audit log: {self._user_label(operator_id)} performed {action} - {description}"
        )
        return self.persist(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.AUDIT_LOG,
                content=content,
                metadata=AuditMetadata(action=action, operator_id=operator_id),
                actor_user_id=operator_id,
            )
        )

    def notify_security_alert(
        self,
        *,
        team_id: int,
        alert_type: str,
        description: str,
        user_id: int | None = None,
    ) -> Message:
        return self._emit(
            MessageDraft(
                team_id=team_id,
                event_type=EventType.SECURITY_ALERT,
                content=f"Security alert: {description}",
                metadata=SecurityAlertMetadata(alert_type=alert_type, user_id=user_id),
                actor_user_id=user_id,
            ),
            recipients=[user_id],
        )

    def broadcast(
        self,
        *,
        title: str,
        content: str,
        target_type: str = BROADCAST_ALL,
        target_ids: Sequence[int] = (),
        sent_by: int | None = None,
    ) -> BroadcastResult:
        """Record one ``system_broadcast`` message per distinct recipient."""

        title = (title or "").strip()
        content = (content or "").strip()
        if not title or not content:
            raise ValidationError("Title and content are required")

        recipient_ids = self._broadcast_recipients(target_type, list(target_ids or ()))
        if not recipient_ids:
            raise ValidationError("No recipients found")

        messages = self.persist_many(
            [
                MessageDraft(
                    team_id=None,
                    event_type=EventType.SYSTEM_BROADCAST,
                    content=content,
                    metadata=BroadcastMetadata(
                        target_user_id=recipient_id,
                        broadcast_type=target_type,
                        sent_by=sent_by,
                        title=title,
                    ),
                    actor_user_id=sent_by,
                )
                for recipient_id in recipient_ids
            ]
        )
        self.try_push(
            recipient_ids,
            build_notification_payload(EventType.SYSTEM_BROADCAST.value, content),
        )
        users = self._users.get_map_by_ids(recipient_ids)
        logger.info("Broadcast '%s' sent to %d recipients", title, len(recipient_ids))
        return BroadcastResult(
            messages=messages,
            recipients=[users[recipient_id] for recipient_id in recipient_ids],
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _emit(
        self,
        draft: MessageDraft,
        *,
        recipients: Iterable[int | None],
        task_id: int | None = None,
    ) -> Message:
        message = self.persist(draft)
        self.try_push(
            recipients,
            build_notification_payload(
                message.event_type.value,
                message.content,
                task_id=task_id,
                team_id=message.team_id,
            ),
        )
        return message

    def _build(self, draft: MessageDraft) -> Message:
        definition = self.catalog.get(draft.event_type)
        if not isinstance(draft.metadata, definition.metadata_type):
            raise ValidationError(
                f"{definition.event_type.value} messages require "
                f"{definition.metadata_type.__name__} metadata"
            )
        if not draft.content:
            raise ValidationError("Message content is required")
        return Message(
            id=None,
            team_id=draft.team_id,
            actor_user_id=draft.actor_user_id,
            event_type=definition.event_type,
            content=draft.content,
            metadata=draft.metadata,
            priority=draft.priority or definition.priority,
            message_kind=draft.message_kind or definition.message_kind,
        )

    def _broadcast_recipients(self, target_type: str, target_ids: list[int]) -> list[int]:
        if target_type == BROADCAST_ALL:
            return self._users.list_ids()
        if target_type == BROADCAST_ADMINS:
            return self._users.list_ids(role="admin")
        if target_type == BROADCAST_USERS:
            if not target_ids:
                raise ValidationError("Target user IDs are required")
            return self._users.existing_ids(_unique(target_ids))
        if target_type == BROADCAST_TEAMS:
            if not target_ids:
                raise ValidationError("Target team IDs are required")
            member_ids = self._teams.member_ids(_unique(target_ids))
            return self._users.existing_ids(_unique(member_ids))
        raise ValidationError("Invalid target type")

    @staticmethod
    def _role_event(old_role: str, new_role: str) -> EventType:
        """Only a single step up or down the rank ladder counts as a promotion or demotion."""

        old_rank = TEAM_ROLE_RANKS.get((old_role or "").lower())
        new_rank = TEAM_ROLE_RANKS.get((new_role or "").lower())
        if old_rank is None or new_rank is None:
            return EventType.ROLE_CHANGE
        if new_rank - old_rank == 1:
            return EventType.ROLE_PROMOTED
        if old_rank - new_rank == 1:
            return EventType.ROLE_DEMOTED
        return EventType.ROLE_CHANGE

    def _user_label(self, user_id: int | None) -> str:
        if user_id is None:
            return UNKNOWN_USER
        try:
            user = self._users.get(user_id)
        except SQLAlchemyError:
            self.session.rollback()
            logger.warning("Could not look up user %s for a notification", user_id, exc_info=True)
            return UNKNOWN_USER
        if user is None:
            logger.warning("User %s not found while rendering a notification", user_id)
            return UNKNOWN_USER
        return user.display_name()

    def _team_label(self, team_id: int | None) -> str:
        if team_id is None:
            return UNKNOWN_TEAM
        try:
            team = self._teams.get(team_id)
        except SQLAlchemyError:
            self.session.rollback()
            logger.warning("Could not look up team %s for a notification", team_id, exc_info=True)
            return UNKNOWN_TEAM
        if team is None:
            logger.warning("Team %s not found while rendering a notification", team_id)
            return UNKNOWN_TEAM
        return team.name


__all__ = [
    "BROADCAST_ADMINS",
    "BROADCAST_ALL",
    "BROADCAST_TARGETS",
    "BROADCAST_TEAMS",
    "BROADCAST_USERS",
    "BroadcastResult",
    "MessageDispatcher",
    "UNKNOWN_TEAM",
    "UNKNOWN_USER",
]
