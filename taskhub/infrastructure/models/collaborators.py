"""Tables owned by neighbouring subsystems (users, teams, tasks)."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from taskhub.infrastructure.database import Base


class UserModel(Base):
    """Database representation of an application user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)


class TeamModel(Base):
    """Database representation of a team."""

    __tablename__ = "team"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    owner_id = Column(Integer, ForeignKey("user.id"), nullable=False)

    members = relationship(
        "TeamMemberModel",
        back_populates="team",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class TeamMemberModel(Base):
    """Membership of a user in a team."""

    __tablename__ = "team_member"
    __table_args__ = (UniqueConstraint("team_id", "user_id", name="uq_team_member"),)

    id = Column(Integer, primary_key=True)
    team_id = Column(Integer, ForeignKey("team.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="member")
    can_write = Column(Boolean, nullable=False, default=False)

    team = relationship("TeamModel", back_populates="members")


class TaskModel(Base):
    """Task columns that reference grouping trees by label."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    team_id = Column(Integer, ForeignKey("team.id"), nullable=True)
    group = Column(String(120), nullable=False, default="ungrouped")
    team_group = Column(String(120), nullable=False, default="ungrouped")


__all__ = ["TaskModel", "TeamMemberModel", "TeamModel", "UserModel"]
