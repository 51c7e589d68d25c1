"""Schemas for personal and team group endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class GroupCreate(CamelModel):
    name: str
    parent_id: int | None = None
    kind: str = Field(default="custom", alias="type")
    color: str | None = None
    icon: str | None = None


class GroupUpdate(CamelModel):
    name: str | None = None
    color: str | None = None
    icon: str | None = None
    collapsed: bool | None = None


class GroupReorder(CamelModel):
    """Move payload.

    Omitting ``newParentId`` keeps the parent; sending ``null`` moves the
    group to the top level.
    """

    new_order: int
    new_parent_id: int | None = None

    def parent_was_sent(self) -> bool:
        return "new_parent_id" in self.model_fields_set


class GroupRead(CamelModel):
    id: int
    name: str
    kind: str = Field(alias="type")
    scope: str
    owner_id: int
    parent_id: int | None = None
    child_ids: list[int] = Field(default_factory=list)
    order: int
    color: str
    icon: str
    collapsed: bool
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    children: list[GroupRead] = Field(default_factory=list)


class GroupDeleteResult(CamelModel):
    message: str
    deleted_ids: list[int]


class GroupInitializeResult(CamelModel):
    message: str
    initialized: bool


class GroupRename(CamelModel):
    name: str


class GroupRenameResult(CamelModel):
    group: GroupRead
    relabeled_tasks: int


class TaskRead(CamelModel):
    id: int
    title: str
    team_id: int | None = None
    group: str
    team_group: str


class GroupSummaryRead(CamelModel):
    group: GroupRead
    task_count: int


class GroupPageRead(CamelModel):
    items: list[GroupSummaryRead]
    total: int
    skip: int
    limit: int


class GroupDetailRead(CamelModel):
    group: GroupRead
    tasks: list[TaskRead]


GroupRead.model_rebuild()

__all__ = [
    "GroupCreate",
    "GroupDeleteResult",
    "GroupDetailRead",
    "GroupInitializeResult",
    "GroupPageRead",
    "GroupRead",
    "GroupRename",
    "GroupRenameResult",
    "GroupReorder",
    "GroupSummaryRead",
    "GroupUpdate",
    "TaskRead",
]
