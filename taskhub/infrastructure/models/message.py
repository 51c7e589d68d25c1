"""SQLAlchemy model for persisted team messages."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text

from taskhub.infrastructure.database import Base
from taskhub.utils import storage_now


class MessageModel(Base):
    """Database representation for team notifications."""

    __tablename__ = "message"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("team.id", ondelete="SET NULL"), nullable=True)
    actor_user_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    event_type = Column(String(40), nullable=False, index=True)
    content = Column(Text, nullable=False)
    metadata_json = Column("metadata", JSON, nullable=False, default=dict)
    priority = Column(String(10), nullable=False, default="medium")
    message_kind = Column(String(10), nullable=False, default="info")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=storage_now)
    read_at = Column(DateTime(), nullable=True)

    __table_args__ = (
        Index("ix_message_team_created", "team_id", "created_at"),
        Index("ix_message_team_read", "team_id", "is_read"),
    )


__all__ = ["MessageModel"]
