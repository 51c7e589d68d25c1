"""Registry of recognized message event types and their defaults."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Mapping

from taskhub.domain.exceptions import ValidationError

from .message_metadata import (
    AuditMetadata,
    BroadcastMetadata,
    MembershipMetadata,
    MessageKind,
    PermissionMetadata,
    Priority,
    RoleChangeMetadata,
    SecurityAlertMetadata,
    TaskMetadata,
    TeamLifecycleMetadata,
)


class EventType(str, Enum):
    """Closed set of domain occurrences a message can record."""

    MEMBER_JOIN = "member_join"
    MEMBER_LEAVE = "member_leave"
    MEMBER_REMOVED = "member_removed"

    ROLE_CHANGE = "role_change"
    ROLE_PROMOTED = "role_promoted"
    ROLE_DEMOTED = "role_demoted"

    PERMISSION_GRANTED = "permission_granted"
    PERMISSION_REVOKED = "permission_revoked"

    TEAM_CREATED = "team_created"
    TEAM_DELETED = "team_deleted"
    TEAM_UPDATED = "team_updated"

    TASK_ASSIGNED = "task_assigned"
    TASK_COMPLETED = "task_completed"
    TASK_OVERDUE = "task_overdue"
    MENTION = "mention"

    AUDIT_LOG = "audit_log"
    SECURITY_ALERT = "security_alert"

    SYSTEM_BROADCAST = "system_broadcast"


@dataclass(frozen=True)
class EventDefinition:
    """Defaults applied to messages of one event type."""

    event_type: EventType
    priority: Priority
    message_kind: MessageKind
    metadata_type: type


_DEFAULT_DEFINITIONS: tuple[EventDefinition, ...] = (
    EventDefinition(EventType.MEMBER_JOIN, Priority.MEDIUM, MessageKind.SUCCESS, MembershipMetadata),
    EventDefinition(EventType.MEMBER_LEAVE, Priority.MEDIUM, MessageKind.INFO, MembershipMetadata),
    EventDefinition(EventType.MEMBER_REMOVED, Priority.MEDIUM, MessageKind.WARNING, MembershipMetadata),
    EventDefinition(EventType.ROLE_CHANGE, Priority.HIGH, MessageKind.INFO, RoleChangeMetadata),
    EventDefinition(EventType.ROLE_PROMOTED, Priority.HIGH, MessageKind.SUCCESS, RoleChangeMetadata),
    EventDefinition(EventType.ROLE_DEMOTED, Priority.HIGH, MessageKind.WARNING, RoleChangeMetadata),
    EventDefinition(EventType.PERMISSION_GRANTED, Priority.MEDIUM, MessageKind.SUCCESS, PermissionMetadata),
    EventDefinition(EventType.PERMISSION_REVOKED, Priority.MEDIUM, MessageKind.WARNING, PermissionMetadata),
    EventDefinition(EventType.TEAM_CREATED, Priority.MEDIUM, MessageKind.SUCCESS, TeamLifecycleMetadata),
    EventDefinition(EventType.TEAM_DELETED, Priority.URGENT, MessageKind.ERROR, TeamLifecycleMetadata),
    EventDefinition(EventType.TEAM_UPDATED, Priority.MEDIUM, MessageKind.INFO, TeamLifecycleMetadata),
    EventDefinition(EventType.TASK_ASSIGNED, Priority.MEDIUM, MessageKind.INFO, TaskMetadata),
    EventDefinition(EventType.TASK_COMPLETED, Priority.MEDIUM, MessageKind.SUCCESS, TaskMetadata),
    EventDefinition(EventType.TASK_OVERDUE, Priority.HIGH, MessageKind.WARNING, TaskMetadata),
    EventDefinition(EventType.MENTION, Priority.MEDIUM, MessageKind.INFO, TaskMetadata),
    EventDefinition(EventType.AUDIT_LOG, Priority.LOW, MessageKind.INFO, AuditMetadata),
    EventDefinition(EventType.SECURITY_ALERT, Priority.URGENT, MessageKind.ERROR, SecurityAlertMetadata),
    EventDefinition(EventType.SYSTEM_BROADCAST, Priority.MEDIUM, MessageKind.INFO, BroadcastMetadata),
)


class EventCatalog:
    """Lookup table from :class:`EventType` to :class:`EventDefinition`.

    Instances are built once by the application factory and handed to the
    components that need them, so tests can construct their own.
    """

    def __init__(self, definitions: Iterable[EventDefinition]) -> None:
        self._definitions: Mapping[EventType, EventDefinition] = {
            definition.event_type: definition for definition in definitions
        }

    @classmethod
    def default(cls) -> "EventCatalog":
        return cls(_DEFAULT_DEFINITIONS)

    def __iter__(self) -> Iterator[EventDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def is_registered(self, value: str | EventType) -> bool:
        try:
            event_type = EventType(value)
        except ValueError:
            return False
        return event_type in self._definitions

    def resolve(self, value: str | EventType) -> EventType:
        """Return the :class:`EventType` for ``value`` or raise ``ValidationError``."""

        if not self.is_registered(value):
            raise ValidationError(f"Unknown event type '{value}'")
        return EventType(value)

    def get(self, value: str | EventType) -> EventDefinition:
        return self._definitions[self.resolve(value)]

    def defaults_for(self, value: str | EventType) -> tuple[Priority, MessageKind]:
        definition = self.get(value)
        return definition.priority, definition.message_kind


__all__ = ["EventCatalog", "EventDefinition", "EventType"]
