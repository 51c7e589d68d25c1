"""Use case for seeding the starter tree of a new owner."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from taskhub.domain.entities import GROUP_KIND_SYSTEM, GroupScope
from taskhub.infrastructure.repositories import GroupRepository

from .create_group import create_group

logger = logging.getLogger(__name__)

# (name, icon, color, children)
DEFAULT_TREE = (
    ("Work Projects", "💼", "#1890ff", (("Learning", "📚", "#722ed1"),)),
    ("Personal", "🏠", "#52c41a", ()),
)


def initialize_groups(
    session: Session,
    *,
    scope: GroupScope,
    owner_id: int,
    created_by: int | None = None,
) -> bool:
    """Create the default ``system`` groups unless the owner already has any.

    Returns ``True`` when the tree was seeded by this call.
    """

    if GroupRepository(session, scope).count_for_owner(owner_id) > 0:
        return False

    for name, icon, color, children in DEFAULT_TREE:
        parent = create_group(
            session,
            scope=scope,
            owner_id=owner_id,
            name=name,
            created_by=created_by,
            kind=GROUP_KIND_SYSTEM,
            color=color,
            icon=icon,
        )
        for child_name, child_icon, child_color in children:
            create_group(
                session,
                scope=scope,
                owner_id=owner_id,
                name=child_name,
                created_by=created_by,
                parent_id=parent.id,
                kind=GROUP_KIND_SYSTEM,
                color=child_color,
                icon=child_icon,
            )

    logger.info("Seeded default %s groups for owner %s", GroupScope(scope).value, owner_id)
    return True


__all__ = ["DEFAULT_TREE", "initialize_groups"]
