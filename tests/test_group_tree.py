"""Use-case tests for personal and team grouping trees."""

from __future__ import annotations

import pytest

from taskhub.application.use_cases.groups import (
    create_group,
    delete_group,
    ensure_team_member,
    initialize_groups,
    list_group_tree,
    move_group,
    rename_group_as_admin,
    resolve_team_group_owner,
    update_group,
)
from taskhub.domain.entities import GROUP_KIND_SYSTEM, GroupScope
from taskhub.domain.exceptions import NotFoundError, UnauthorizedError, ValidationError
from taskhub.infrastructure.repositories import GroupRepository, TaskRepository

PERSONAL = GroupScope.PERSONAL
TEAM = GroupScope.TEAM


def _assert_linkage_consistent(session, scope, owner_id):
    repository = GroupRepository(session, scope)
    nodes = {node.id: node for node in repository.list_for_owner(owner_id)}
    for node in nodes.values():
        expected = {child.id for child in nodes.values() if child.parent_id == node.id}
        assert set(node.child_ids) == expected
        if node.parent_id is not None:
            assert node.id in nodes[node.parent_id].child_ids


def test_create_appends_to_parent_and_counts_siblings(db_session, make_user):
    user = make_user()

    parent = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="  Work  ")
    first = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="First", parent_id=parent.id
    )
    second = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Second", parent_id=parent.id
    )

    assert parent.name == "Work"
    assert parent.color == "#1890ff"
    assert parent.icon == "📁"
    assert (first.order, second.order) == (0, 1)
    refreshed = GroupRepository(db_session, PERSONAL).get(parent.id)
    assert refreshed.child_ids == [first.id, second.id]
    _assert_linkage_consistent(db_session, PERSONAL, user.id)


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_rejects_empty_name(db_session, make_user, name):
    user = make_user()

    with pytest.raises(ValidationError):
        create_group(db_session, scope=PERSONAL, owner_id=user.id, name=name)


def test_create_rejects_unknown_kind_and_foreign_parent(db_session, make_user):
    owner = make_user()
    stranger = make_user()
    foreign = create_group(db_session, scope=PERSONAL, owner_id=stranger.id, name="Theirs")

    with pytest.raises(ValidationError):
        create_group(db_session, scope=PERSONAL, owner_id=owner.id, name="X", kind="special")
    with pytest.raises(NotFoundError):
        create_group(
            db_session, scope=PERSONAL, owner_id=owner.id, name="X", parent_id=foreign.id
        )


def test_tree_is_nested_and_ordered(db_session, make_user):
    user = make_user()
    beta = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Beta")
    alpha = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Alpha")
    leaf = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Leaf", parent_id=alpha.id
    )
    deeper = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Deeper", parent_id=leaf.id
    )
    move_group(db_session, scope=PERSONAL, node_id=alpha.id, owner_id=user.id, new_order=0)
    move_group(db_session, scope=PERSONAL, node_id=beta.id, owner_id=user.id, new_order=1)

    tree = list_group_tree(db_session, scope=PERSONAL, owner_id=user.id)

    assert [branch.node.name for branch in tree] == ["Alpha", "Beta"]
    assert [child.node.id for child in tree[0].children] == [leaf.id]
    assert [child.node.id for child in tree[0].children[0].children] == [deeper.id]
    assert [node.name for node in tree[0].walk()] == ["Alpha", "Leaf", "Deeper"]


def test_delete_cascades_and_detaches_from_parent(db_session, make_user):
    user = make_user()
    a = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="A")
    b = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="B", parent_id=a.id)
    c = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="C", parent_id=b.id)
    sibling = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Sibling", parent_id=a.id
    )

    removed = delete_group(db_session, scope=PERSONAL, node_id=b.id, owner_id=user.id)

    assert removed == [c.id, b.id]
    repository = GroupRepository(db_session, PERSONAL)
    assert repository.get(b.id) is None
    assert repository.get(c.id) is None
    assert repository.get(a.id).child_ids == [sibling.id]
    _assert_linkage_consistent(db_session, PERSONAL, user.id)


def test_delete_root_removes_whole_subtree(db_session, make_user):
    user = make_user()
    a = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="A")
    b = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="B", parent_id=a.id)
    create_group(db_session, scope=PERSONAL, owner_id=user.id, name="C", parent_id=b.id)
    keep = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Keep")

    delete_group(db_session, scope=PERSONAL, node_id=a.id, owner_id=user.id)

    remaining = GroupRepository(db_session, PERSONAL).list_for_owner(user.id)
    assert [node.id for node in remaining] == [keep.id]


def test_delete_missing_or_foreign_group_is_not_found(db_session, make_user):
    owner = make_user()
    other = make_user()
    node = create_group(db_session, scope=PERSONAL, owner_id=owner.id, name="Mine")

    with pytest.raises(NotFoundError):
        delete_group(db_session, scope=PERSONAL, node_id=node.id, owner_id=other.id)
    with pytest.raises(NotFoundError):
        delete_group(db_session, scope=PERSONAL, node_id=9999, owner_id=owner.id)


def test_update_is_partial(db_session, make_user):
    user = make_user()
    node = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Inbox", color="#000000"
    )

    updated = update_group(
        db_session, scope=PERSONAL, node_id=node.id, owner_id=user.id, collapsed=True
    )

    assert updated.collapsed is True
    assert updated.name == "Inbox"
    assert updated.color == "#000000"
    with pytest.raises(ValidationError):
        update_group(db_session, scope=PERSONAL, node_id=node.id, owner_id=user.id, name=" ")


def test_move_without_parent_only_changes_order(db_session, make_user):
    user = make_user()
    parent = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Parent")
    child = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Child", parent_id=parent.id
    )

    moved = move_group(
        db_session, scope=PERSONAL, node_id=child.id, owner_id=user.id, new_order=5
    )

    assert moved.order == 5
    assert moved.parent_id == parent.id
    assert GroupRepository(db_session, PERSONAL).get(parent.id).child_ids == [child.id]


def test_move_to_new_parent_and_to_top_level(db_session, make_user):
    user = make_user()
    old_parent = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Old")
    new_parent = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="New")
    existing = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Existing", parent_id=new_parent.id
    )
    node = create_group(
        db_session, scope=PERSONAL, owner_id=user.id, name="Node", parent_id=old_parent.id
    )

    moved = move_group(
        db_session,
        scope=PERSONAL,
        node_id=node.id,
        owner_id=user.id,
        new_order=0,
        new_parent_id=new_parent.id,
    )

    repository = GroupRepository(db_session, PERSONAL)
    assert moved.parent_id == new_parent.id
    assert repository.get(old_parent.id).child_ids == []
    assert repository.get(new_parent.id).child_ids == [node.id, existing.id]

    top = move_group(
        db_session,
        scope=PERSONAL,
        node_id=node.id,
        owner_id=user.id,
        new_order=3,
        new_parent_id=None,
    )

    assert top.parent_id is None
    assert top.order == 3
    assert repository.get(new_parent.id).child_ids == [existing.id]
    _assert_linkage_consistent(db_session, PERSONAL, user.id)


def test_move_into_own_subtree_is_rejected(db_session, make_user):
    user = make_user()
    a = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="A")
    b = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="B", parent_id=a.id)

    with pytest.raises(ValidationError):
        move_group(
            db_session,
            scope=PERSONAL,
            node_id=a.id,
            owner_id=user.id,
            new_order=0,
            new_parent_id=b.id,
        )
    with pytest.raises(ValidationError):
        move_group(
            db_session,
            scope=PERSONAL,
            node_id=a.id,
            owner_id=user.id,
            new_order=0,
            new_parent_id=a.id,
        )
    assert GroupRepository(db_session, PERSONAL).get(a.id).parent_id is None


def test_move_rejects_negative_order(db_session, make_user):
    user = make_user()
    node = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="A")

    with pytest.raises(ValidationError):
        move_group(db_session, scope=PERSONAL, node_id=node.id, owner_id=user.id, new_order=-1)


def test_initialize_seeds_defaults_once(db_session, make_user):
    user = make_user()

    assert initialize_groups(db_session, scope=PERSONAL, owner_id=user.id, created_by=user.id)
    assert not initialize_groups(
        db_session, scope=PERSONAL, owner_id=user.id, created_by=user.id
    )

    tree = list_group_tree(db_session, scope=PERSONAL, owner_id=user.id)
    assert [(b.node.name, b.node.icon, b.node.color, b.node.order) for b in tree] == [
        ("Work Projects", "💼", "#1890ff", 0),
        ("Personal", "🏠", "#52c41a", 1),
    ]
    learning = tree[0].children[0].node
    assert (learning.name, learning.icon, learning.color, learning.order) == (
        "Learning",
        "📚",
        "#722ed1",
        0,
    )
    assert all(node.kind == GROUP_KIND_SYSTEM for branch in tree for node in branch.walk())
    assert GroupRepository(db_session, PERSONAL).count_for_owner(user.id) == 3


def test_initialize_is_skipped_when_owner_has_any_group(db_session, make_user):
    user = make_user()
    create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Mine")

    assert not initialize_groups(db_session, scope=PERSONAL, owner_id=user.id)
    assert GroupRepository(db_session, PERSONAL).count_for_owner(user.id) == 1


def test_system_groups_can_be_renamed_and_deleted(db_session, make_user):
    user = make_user()
    initialize_groups(db_session, scope=PERSONAL, owner_id=user.id)
    work = list_group_tree(db_session, scope=PERSONAL, owner_id=user.id)[0].node

    renamed = update_group(
        db_session, scope=PERSONAL, node_id=work.id, owner_id=user.id, name="Job"
    )
    removed = delete_group(db_session, scope=PERSONAL, node_id=work.id, owner_id=user.id)

    assert renamed.name == "Job"
    assert len(removed) == 2


def test_scopes_are_isolated(db_session, make_user, make_team):
    user = make_user()
    team = make_team("Core", user)

    create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Personal only")
    initialize_groups(db_session, scope=TEAM, owner_id=team.id, created_by=user.id)

    assert [b.node.name for b in list_group_tree(db_session, scope=PERSONAL, owner_id=user.id)] == [
        "Personal only"
    ]
    team_tree = list_group_tree(db_session, scope=TEAM, owner_id=team.id)
    assert [b.node.name for b in team_tree] == ["Work Projects", "Personal"]
    assert all(b.node.scope is TEAM for b in team_tree)


def test_team_membership_is_required(db_session, make_user, make_team):
    owner = make_user()
    outsider = make_user()
    team = make_team("Core", owner)
    node = create_group(db_session, scope=TEAM, owner_id=team.id, name="Board")

    ensure_team_member(db_session, team_id=team.id, user_id=owner.id)
    assert resolve_team_group_owner(db_session, node_id=node.id, user_id=owner.id) == team.id
    with pytest.raises(UnauthorizedError):
        ensure_team_member(db_session, team_id=team.id, user_id=outsider.id)
    with pytest.raises(UnauthorizedError):
        resolve_team_group_owner(db_session, node_id=node.id, user_id=outsider.id)
    with pytest.raises(NotFoundError):
        ensure_team_member(db_session, team_id=9999, user_id=owner.id)


def test_admin_rename_relabels_tasks_filed_by_name(db_session, make_user, make_task):
    user = make_user()
    node = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Errands")
    by_name = make_task("Buy milk", group="Errands")
    by_id = make_task("Call bank", group=str(node.id))

    result = rename_group_as_admin(db_session, node_id=node.id, new_name="Chores")

    tasks = TaskRepository(db_session)
    assert result.group.name == "Chores"
    assert result.relabeled_tasks == 1
    assert [task.id for task in tasks.list_by_group_label("Chores")] == [by_name.id]
    # Tasks that reference the group by id are left untouched.
    assert [task.id for task in tasks.list_by_group_label(str(node.id))] == [by_id.id]


def test_admin_rename_rejects_duplicate_names(db_session, make_user):
    user = make_user()
    other = make_user()
    node = create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Errands")
    create_group(db_session, scope=PERSONAL, owner_id=user.id, name="Chores")
    create_group(db_session, scope=PERSONAL, owner_id=other.id, name="Shopping")

    with pytest.raises(ValidationError):
        rename_group_as_admin(db_session, node_id=node.id, new_name="Chores")
    assert rename_group_as_admin(db_session, node_id=node.id, new_name="Shopping").group.name == (
        "Shopping"
    )
    with pytest.raises(NotFoundError):
        rename_group_as_admin(db_session, node_id=9999, new_name="Anything")
