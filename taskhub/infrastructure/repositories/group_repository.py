"""Persistence adapter for grouping tree nodes.

One repository class serves both scopes; the scope selects the backing table.
Every mutating method commits on its own, so multi-step tree operations are
not atomic.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from taskhub.domain.entities import GroupNode, GroupScope
from taskhub.infrastructure.models import GroupNodeModel, TeamGroupNodeModel
from taskhub.utils import ensure_app_timezone

_MODELS = {
    GroupScope.PERSONAL: GroupNodeModel,
    GroupScope.TEAM: TeamGroupNodeModel,
}


class GroupRepository:
    """Provide CRUD operations for :class:`GroupNode` objects of one scope."""

    def __init__(self, session: Session, scope: GroupScope | str) -> None:
        self.session = session
        self.scope = GroupScope(scope)
        self._model = _MODELS[self.scope]

    def get(self, node_id: int, *, owner_id: int | None = None) -> GroupNode | None:
        model = self._get_model(node_id, owner_id=owner_id)
        return self._to_entity(model) if model else None

    def list_for_owner(self, owner_id: int) -> Sequence[GroupNode]:
        query = (
            self.session.query(self._model)
            .filter(self._model.owner_id == owner_id)
            .order_by(self._model.order, self._model.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_children(self, owner_id: int, parent_id: int | None) -> Sequence[GroupNode]:
        query = self._children_query(owner_id, parent_id).order_by(
            self._model.order, self._model.id
        )
        return [self._to_entity(model) for model in query.all()]

    def count_children(self, owner_id: int, parent_id: int | None) -> int:
        return self._children_query(owner_id, parent_id).count()

    def count_for_owner(self, owner_id: int) -> int:
        return (
            self.session.query(func.count(self._model.id))
            .filter(self._model.owner_id == owner_id)
            .scalar()
            or 0
        )

    def find_by_name(
        self, owner_id: int, name: str, *, exclude_id: int | None = None
    ) -> GroupNode | None:
        query = self.session.query(self._model).filter(
            self._model.owner_id == owner_id, self._model.name == name
        )
        if exclude_id is not None:
            query = query.filter(self._model.id != exclude_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def search(
        self,
        *,
        owner_id: int | None = None,
        text: str | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> tuple[list[GroupNode], int]:
        """Return one page of groups across owners, newest first, and the match count."""

        query = self.session.query(self._model)
        if owner_id is not None:
            query = query.filter(self._model.owner_id == owner_id)
        if text:
            query = query.filter(self._model.name.ilike(f"%{text}%"))

        total = query.count()
        query = query.order_by(desc(self._model.created_at), desc(self._model.id))
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def create(self, node: GroupNode) -> GroupNode:
        model = self._model()
        model.owner_id = node.owner_id
        model.created_by = node.created_by
        self._apply_entity_to_model(model, node)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, node: GroupNode) -> GroupNode:
        model = self._get_model(node.id, owner_id=node.owner_id)
        if model is None:
            msg = f"Group with id {node.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, node)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, node_id: int) -> None:
        model = self._get_model(node_id)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()

    def insert_child_id(
        self, parent_id: int, child_id: int, position: int | None = None
    ) -> None:
        """Add ``child_id`` to the parent's cache, at the end unless ``position``."""

        model = self._get_model(parent_id)
        if model is None:
            return
        child_ids = [value for value in (model.child_ids or []) if value != child_id]
        if position is None:
            child_ids.append(child_id)
        else:
            child_ids.insert(max(0, min(position, len(child_ids))), child_id)
        model.child_ids = child_ids
        self.session.add(model)
        self.session.commit()

    def remove_child_id(self, parent_id: int, child_id: int) -> None:
        model = self._get_model(parent_id)
        if model is None:
            return
        model.child_ids = [value for value in (model.child_ids or []) if value != child_id]
        self.session.add(model)
        self.session.commit()

    def _children_query(self, owner_id: int, parent_id: int | None):
        query = self.session.query(self._model).filter(self._model.owner_id == owner_id)
        if parent_id is None:
            return query.filter(self._model.parent_id.is_(None))
        return query.filter(self._model.parent_id == parent_id)

    def _get_model(self, node_id: int | None, *, owner_id: int | None = None):
        if node_id is None:
            return None
        query = self.session.query(self._model).filter(self._model.id == node_id)
        if owner_id is not None:
            query = query.filter(self._model.owner_id == owner_id)
        return query.first()

    @staticmethod
    def _apply_entity_to_model(model, node: GroupNode) -> None:
        model.name = node.name
        model.kind = node.kind
        model.parent_id = node.parent_id
        model.child_ids = list(node.child_ids)
        model.order = node.order
        model.color = node.color
        model.icon = node.icon
        model.collapsed = node.collapsed

    def _to_entity(self, model) -> GroupNode:
        return GroupNode(
            id=model.id,
            scope=self.scope,
            owner_id=model.owner_id,
            name=model.name,
            kind=model.kind,
            parent_id=model.parent_id,
            child_ids=list(model.child_ids or []),
            order=model.order,
            color=model.color,
            icon=model.icon,
            collapsed=model.collapsed,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["GroupRepository"]
