"""Routes for the group tree shared by the members of a team."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskhub.application.use_cases.groups import (
    KEEP_PARENT,
    create_group as create_group_uc,
    delete_group as delete_group_uc,
    ensure_team_member,
    initialize_groups as initialize_groups_uc,
    list_group_tree as list_group_tree_uc,
    move_group as move_group_uc,
    resolve_team_group_owner,
    update_group as update_group_uc,
)
from taskhub.domain.entities import GroupScope, User
from taskhub.domain.exceptions import TaskhubError
from taskhub.infrastructure.database import get_db
from taskhub.interfaces.api.dependencies import get_current_active_user
from taskhub.interfaces.api.routes_helpers import group_to_read, http_error_from, tree_to_read
from taskhub.interfaces.api.schemas import (
    GroupCreate,
    GroupDeleteResult,
    GroupInitializeResult,
    GroupRead,
    GroupReorder,
    GroupUpdate,
)

router = APIRouter(prefix="/team-groups", tags=["team-groups"])

SCOPE = GroupScope.TEAM


@router.get("/{team_id}", response_model=list[GroupRead])
def list_team_groups(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[GroupRead]:
    try:
        ensure_team_member(db, team_id=team_id, user_id=current_user.id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    tree = list_group_tree_uc(db, scope=SCOPE, owner_id=team_id)
    return [tree_to_read(branch) for branch in tree]


@router.post("/{team_id}", response_model=GroupRead, status_code=status.HTTP_201_CREATED)
def create_team_group(
    team_id: int,
    payload: GroupCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> GroupRead:
    try:
        ensure_team_member(db, team_id=team_id, user_id=current_user.id)
        node = create_group_uc(
            db,
            scope=SCOPE,
            owner_id=team_id,
            created_by=current_user.id,
            name=payload.name,
            parent_id=payload.parent_id,
            kind=payload.kind,
            color=payload.color,
            icon=payload.icon,
        )
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return group_to_read(node)


@router.put("/{group_id}", response_model=GroupRead)
def update_team_group(
    group_id: int,
    payload: GroupUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> GroupRead:
    try:
        team_id = resolve_team_group_owner(db, node_id=group_id, user_id=current_user.id)
        node = update_group_uc(
            db,
            scope=SCOPE,
            node_id=group_id,
            owner_id=team_id,
            name=payload.name,
            color=payload.color,
            icon=payload.icon,
            collapsed=payload.collapsed,
        )
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return group_to_read(node)


@router.delete("/{group_id}", response_model=GroupDeleteResult)
def delete_team_group(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> GroupDeleteResult:
    try:
        team_id = resolve_team_group_owner(db, node_id=group_id, user_id=current_user.id)
        removed = delete_group_uc(db, scope=SCOPE, node_id=group_id, owner_id=team_id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return GroupDeleteResult(message="Group deleted", deleted_ids=removed)


@router.put("/{group_id}/reorder", response_model=GroupRead)
def reorder_team_group(
    group_id: int,
    payload: GroupReorder,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> GroupRead:
    new_parent_id = payload.new_parent_id if payload.parent_was_sent() else KEEP_PARENT
    try:
        team_id = resolve_team_group_owner(db, node_id=group_id, user_id=current_user.id)
        node = move_group_uc(
            db,
            scope=SCOPE,
            node_id=group_id,
            owner_id=team_id,
            new_order=payload.new_order,
            new_parent_id=new_parent_id,
        )
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    return group_to_read(node)


@router.post("/{team_id}/initialize", response_model=GroupInitializeResult)
def initialize_team_groups(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> GroupInitializeResult:
    try:
        ensure_team_member(db, team_id=team_id, user_id=current_user.id)
    except TaskhubError as exc:
        raise http_error_from(exc) from exc
    seeded = initialize_groups_uc(db, scope=SCOPE, owner_id=team_id, created_by=current_user.id)
    message = (
        "Default groups initialized successfully" if seeded else "Groups already initialized"
    )
    return GroupInitializeResult(message=message, initialized=seeded)
