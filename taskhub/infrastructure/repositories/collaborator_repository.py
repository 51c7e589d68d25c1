"""Read access to the user, team and task collaborators."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskhub.domain.entities import Task, Team, TeamMember, User
from taskhub.infrastructure.models import TaskModel, TeamMemberModel, TeamModel, UserModel


class UserRepository:
    """Lookups against the user table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        ids = {user_id for user_id in user_ids if user_id is not None}
        if not ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def list_ids(self, *, role: str | None = None) -> list[int]:
        query = self.session.query(UserModel.id)
        if role is not None:
            query = query.filter(func.lower(UserModel.role) == role.lower())
        return [row.id for row in query.order_by(UserModel.id).all()]

    def existing_ids(self, user_ids: Iterable[int]) -> list[int]:
        """Return the ids from ``user_ids`` that exist, keeping their order."""

        requested = list(user_ids)
        found = set(self.get_map_by_ids(requested))
        return [user_id for user_id in requested if user_id in found]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            is_active=model.is_active,
        )


class TeamRepository:
    """Lookups against teams and their membership."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, team_id: int) -> Team | None:
        model = self.session.get(TeamModel, team_id)
        return self._to_entity(model) if model else None

    def list_team_ids_for_user(self, user_id: int) -> list[int]:
        query = (
            self.session.query(TeamMemberModel.team_id)
            .filter(TeamMemberModel.user_id == user_id)
            .order_by(TeamMemberModel.team_id)
        )
        return [row.team_id for row in query.all()]

    def is_member(self, team_id: int, user_id: int) -> bool:
        return (
            self.session.query(TeamMemberModel.id)
            .filter(TeamMemberModel.team_id == team_id, TeamMemberModel.user_id == user_id)
            .first()
            is not None
        )

    def member_ids(self, team_ids: Iterable[int]) -> list[int]:
        """Return the member ids of ``team_ids`` in team order, with repeats."""

        ids = list(team_ids)
        if not ids:
            return []
        query = (
            self.session.query(TeamMemberModel.user_id)
            .filter(TeamMemberModel.team_id.in_(ids))
            .order_by(TeamMemberModel.team_id, TeamMemberModel.id)
        )
        return [row.user_id for row in query.all()]

    @staticmethod
    def _to_entity(model: TeamModel) -> Team:
        return Team(
            id=model.id,
            name=model.name,
            owner_id=model.owner_id,
            members=[
                TeamMember(user_id=member.user_id, role=member.role, can_write=member.can_write)
                for member in model.members
            ],
        )


class TaskRepository:
    """The slice of the task store that grouping operations touch."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_group_label(self, label: str) -> Sequence[Task]:
        query = self.session.query(TaskModel).filter(TaskModel.group == label)
        return [self._to_entity(model) for model in query.order_by(TaskModel.id).all()]

    def list_by_team_group(self, team_id: int, label: str) -> Sequence[Task]:
        query = self.session.query(TaskModel).filter(
            TaskModel.team_id == team_id, TaskModel.team_group == label
        )
        return [self._to_entity(model) for model in query.order_by(TaskModel.id).all()]

    def count_by_group_labels(self, labels: Iterable[str]) -> dict[str, int]:
        names = set(labels)
        if not names:
            return {}
        query = (
            self.session.query(TaskModel.group, func.count(TaskModel.id))
            .filter(TaskModel.group.in_(names))
            .group_by(TaskModel.group)
        )
        return {label: count for label, count in query.all()}

    def count_by_team_group(self, team_id: int, label: str) -> int:
        return (
            self.session.query(func.count(TaskModel.id))
            .filter(TaskModel.team_id == team_id, TaskModel.team_group == label)
            .scalar()
            or 0
        )

    def relabel_group(self, old_label: str, new_label: str) -> int:
        """Rewrite ``group`` on every task whose value equals ``old_label``."""

        updated = (
            self.session.query(TaskModel)
            .filter(TaskModel.group == old_label)
            .update({TaskModel.group: new_label}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            team_id=model.team_id,
            group=model.group,
            team_group=model.team_group,
        )


__all__ = ["TaskRepository", "TeamRepository", "UserRepository"]
