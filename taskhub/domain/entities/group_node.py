"""Domain entities for personal and team grouping trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

GROUP_KIND_SYSTEM = "system"
GROUP_KIND_CUSTOM = "custom"
GROUP_KINDS = frozenset({GROUP_KIND_SYSTEM, GROUP_KIND_CUSTOM})

DEFAULT_GROUP_COLOR = "#1890ff"
DEFAULT_GROUP_ICON = "📁"


class GroupScope(str, Enum):
    """Which kind of owner a grouping tree belongs to."""

    PERSONAL = "personal"
    TEAM = "team"


@dataclass
class GroupNode:
    """One node of a grouping tree.

    ``owner_id`` is a user id for personal trees and a team id for team trees.
    ``child_ids`` is a cache of the nodes whose ``parent_id`` points here.
    """

    id: int | None
    scope: GroupScope
    owner_id: int
    name: str
    kind: str = GROUP_KIND_CUSTOM
    parent_id: int | None = None
    child_ids: list[int] = field(default_factory=list)
    order: int = 0
    color: str = DEFAULT_GROUP_COLOR
    icon: str = DEFAULT_GROUP_ICON
    collapsed: bool = False
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_system(self) -> bool:
        return self.kind == GROUP_KIND_SYSTEM


@dataclass
class GroupTreeNode:
    """A node together with its recursively populated children."""

    node: GroupNode
    children: list["GroupTreeNode"] = field(default_factory=list)

    def walk(self):
        """Yield this node and every descendant depth-first."""

        yield self.node
        for child in self.children:
            yield from child.walk()


__all__ = [
    "DEFAULT_GROUP_COLOR",
    "DEFAULT_GROUP_ICON",
    "GROUP_KINDS",
    "GROUP_KIND_CUSTOM",
    "GROUP_KIND_SYSTEM",
    "GroupNode",
    "GroupScope",
    "GroupTreeNode",
]
