"""SQLAlchemy models for personal and team grouping trees."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import declared_attr

from taskhub.domain.entities import DEFAULT_GROUP_COLOR, DEFAULT_GROUP_ICON, GROUP_KIND_CUSTOM
from taskhub.infrastructure.database import Base
from taskhub.utils import storage_now


class _GroupNodeColumns:
    """Columns shared by both grouping tables.

    ``parent_id`` carries no foreign key: a cascade delete removes children
    before their parent, one committed write at a time.
    """

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    kind = Column(String(20), nullable=False, default=GROUP_KIND_CUSTOM)
    parent_id = Column(Integer, nullable=True)
    child_ids = Column(JSON, nullable=False, default=list)
    order = Column(Integer, nullable=False, default=0)
    color = Column(String(20), nullable=False, default=DEFAULT_GROUP_COLOR)
    icon = Column(String(16), nullable=False, default=DEFAULT_GROUP_ICON)
    collapsed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=storage_now)
    updated_at = Column(DateTime(), nullable=True, onupdate=storage_now)

    @declared_attr
    def created_by(cls):
        return Column(Integer, ForeignKey("user.id"), nullable=True)


class GroupNodeModel(_GroupNodeColumns, Base):
    """Node of a user's personal grouping tree."""

    __tablename__ = "group_node"

    owner_id = Column(Integer, ForeignKey("user.id"), nullable=False)

    __table_args__ = (
        Index("ix_group_node_owner_parent", "owner_id", "parent_id"),
        Index("ix_group_node_owner_order", "owner_id", "order"),
    )


class TeamGroupNodeModel(_GroupNodeColumns, Base):
    """Node of a team's grouping tree."""

    __tablename__ = "team_group_node"

    owner_id = Column(Integer, ForeignKey("team.id"), nullable=False)

    __table_args__ = (
        Index("ix_team_group_node_owner_parent", "owner_id", "parent_id"),
        Index("ix_team_group_node_owner_order", "owner_id", "order"),
    )


__all__ = ["GroupNodeModel", "TeamGroupNodeModel"]
