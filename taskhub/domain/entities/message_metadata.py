"""Per-event payload variants attached to persisted messages.

Each variant is a frozen dataclass. On the wire and in storage the payload is a
flat JSON object using camelCase keys (``targetUserId``, ``oldRole`` ...),
which is the shape API consumers already rely on.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Mapping, Union


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MessageKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class MembershipMetadata:
    target_user_id: int
    operator_id: int | None = None


@dataclass(frozen=True)
class RoleChangeMetadata:
    target_user_id: int
    old_role: str
    new_role: str
    operator_id: int | None = None


@dataclass(frozen=True)
class PermissionMetadata:
    target_user_id: int
    permission: str
    operator_id: int | None = None


@dataclass(frozen=True)
class TeamLifecycleMetadata:
    operator_id: int | None = None
    team_name: str | None = None
    target_user_id: int | None = None


@dataclass(frozen=True)
class TaskMetadata:
    task_id: int
    target_user_id: int | None = None
    operator_id: int | None = None


@dataclass(frozen=True)
class AuditMetadata:
    action: str
    operator_id: int | None = None


@dataclass(frozen=True)
class SecurityAlertMetadata:
    alert_type: str
    user_id: int | None = None


@dataclass(frozen=True)
class BroadcastMetadata:
    target_user_id: int
    broadcast_type: str
    sent_by: int | None = None
    title: str | None = None


MessageMetadata = Union[
    MembershipMetadata,
    RoleChangeMetadata,
    PermissionMetadata,
    TeamLifecycleMetadata,
    TaskMetadata,
    AuditMetadata,
    SecurityAlertMetadata,
    BroadcastMetadata,
]


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


def metadata_to_dict(metadata: MessageMetadata) -> dict[str, Any]:
    """Return the camelCase JSON representation of ``metadata``."""

    return {
        _camel(key): value for key, value in asdict(metadata).items() if value is not None
    }


def metadata_from_dict(variant: type, data: Mapping[str, Any] | None) -> MessageMetadata:
    """Rebuild a ``variant`` instance from its stored JSON representation."""

    data = data or {}
    kwargs = {}
    for item in fields(variant):
        key = _camel(item.name)
        if key in data and data[key] is not None:
            kwargs[item.name] = data[key]
    try:
        return variant(**kwargs)
    except TypeError as exc:
        msg = f"Stored metadata does not match {variant.__name__}: {dict(data)!r}"
        raise ValueError(msg) from exc


__all__ = [
    "AuditMetadata",
    "BroadcastMetadata",
    "MembershipMetadata",
    "MessageKind",
    "MessageMetadata",
    "PermissionMetadata",
    "Priority",
    "RoleChangeMetadata",
    "SecurityAlertMetadata",
    "TaskMetadata",
    "TeamLifecycleMetadata",
    "metadata_from_dict",
    "metadata_to_dict",
]
