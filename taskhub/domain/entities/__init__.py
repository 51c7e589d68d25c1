"""Domain entities exposed by the application."""

from .collaborators import (
    TEAM_ROLE_CREATOR,
    TEAM_ROLE_MANAGER,
    TEAM_ROLE_MEMBER,
    TEAM_ROLE_RANKS,
    Task,
    Team,
    TeamMember,
    User,
)
from .event_catalog import EventCatalog, EventDefinition, EventType
from .group_node import (
    DEFAULT_GROUP_COLOR,
    DEFAULT_GROUP_ICON,
    GROUP_KIND_CUSTOM,
    GROUP_KIND_SYSTEM,
    GROUP_KINDS,
    GroupNode,
    GroupScope,
    GroupTreeNode,
)
from .message import Message, MessageDraft
from .message_metadata import (
    AuditMetadata,
    BroadcastMetadata,
    MembershipMetadata,
    MessageKind,
    MessageMetadata,
    PermissionMetadata,
    Priority,
    RoleChangeMetadata,
    SecurityAlertMetadata,
    TaskMetadata,
    TeamLifecycleMetadata,
    metadata_from_dict,
    metadata_to_dict,
)

__all__ = [
    "AuditMetadata",
    "BroadcastMetadata",
    "DEFAULT_GROUP_COLOR",
    "DEFAULT_GROUP_ICON",
    "EventCatalog",
    "EventDefinition",
    "EventType",
    "GROUP_KINDS",
    "GROUP_KIND_CUSTOM",
    "GROUP_KIND_SYSTEM",
    "GroupNode",
    "GroupScope",
    "GroupTreeNode",
    "MembershipMetadata",
    "Message",
    "MessageDraft",
    "MessageKind",
    "MessageMetadata",
    "PermissionMetadata",
    "Priority",
    "RoleChangeMetadata",
    "SecurityAlertMetadata",
    "TEAM_ROLE_CREATOR",
    "TEAM_ROLE_MANAGER",
    "TEAM_ROLE_MEMBER",
    "TEAM_ROLE_RANKS",
    "Task",
    "TaskMetadata",
    "Team",
    "TeamLifecycleMetadata",
    "TeamMember",
    "User",
    "metadata_from_dict",
    "metadata_to_dict",
]
