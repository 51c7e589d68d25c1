"""Tests for the administrative message browser and group listing."""

from __future__ import annotations

import pytest

from taskhub.application.use_cases.groups import (
    browse_groups,
    create_group,
    get_group_detail,
)
from taskhub.application.use_cases.messages import (
    MessageDispatcher,
    browse_messages,
    get_message,
    mark_message_read,
    set_message_read_state,
)
from taskhub.domain.entities import EventType, GroupScope
from taskhub.domain.exceptions import NotFoundError, ValidationError


@pytest.fixture()
def dispatcher(db_session):
    return MessageDispatcher(db_session)


@pytest.fixture()
def seeded(db_session, dispatcher, make_user, make_team):
    owner = make_user("Owner")
    member = make_user("Member")
    core = make_team("Core", owner, [member])
    ops = make_team("Ops", owner)
    joined = dispatcher.notify_member_join(team_id=core.id, member_id=member.id, operator_id=owner.id)
    updated = dispatcher.notify_team_updated(team_id=core.id, team_name="Core", operator_id=owner.id)
    alert = dispatcher.notify_security_alert(
        team_id=ops.id, alert_type="login", description="Suspicious login"
    )
    mark_message_read(db_session, message_id=updated.id, user_id=owner.id)
    return {
        "owner": owner,
        "core": core,
        "ops": ops,
        "joined": joined,
        "updated": updated,
        "alert": alert,
    }


def test_browse_messages_filters(db_session, seeded):
    def ids(**filters):
        return [message.id for message in browse_messages(db_session, **filters).items]

    assert ids() == [seeded["alert"].id, seeded["updated"].id, seeded["joined"].id]
    assert ids(team_id=seeded["core"].id) == [seeded["updated"].id, seeded["joined"].id]
    assert ids(event_type="security_alert") == [seeded["alert"].id]
    assert ids(is_read=True) == [seeded["updated"].id]
    assert ids(is_read=False, team_id=seeded["core"].id) == [seeded["joined"].id]
    assert ids(priority="urgent") == [seeded["alert"].id]
    assert ids(search="suspicious") == [seeded["alert"].id]


def test_browse_messages_paginates(db_session, seeded):
    page = browse_messages(db_session, skip=1, limit=1)

    assert page.total == 3
    assert [message.id for message in page.items] == [seeded["updated"].id]


@pytest.mark.parametrize(
    "filters",
    [{"event_type": "coffee_break"}, {"priority": "whenever"}, {"limit": 0}, {"skip": -1}],
)
def test_browse_messages_rejects_bad_filters(db_session, filters):
    with pytest.raises(ValidationError):
        browse_messages(db_session, **filters)


def test_get_message(db_session, seeded):
    assert get_message(db_session, message_id=seeded["alert"].id).event_type is EventType.SECURITY_ALERT
    with pytest.raises(NotFoundError):
        get_message(db_session, message_id=9999)


def test_set_message_read_state_without_membership(db_session, seeded):
    joined = seeded["joined"]

    read = set_message_read_state(db_session, message_id=joined.id)
    again = set_message_read_state(db_session, message_id=joined.id, is_read=True)
    unread = set_message_read_state(db_session, message_id=joined.id, is_read=False)

    assert read.is_read is True
    assert again.read_at == read.read_at
    assert unread.is_read is False
    assert unread.read_at is None
    with pytest.raises(NotFoundError):
        set_message_read_state(db_session, message_id=9999)


def test_browse_personal_groups_counts_tasks_by_name(db_session, make_user, make_task):
    alice = make_user()
    bob = make_user()
    errands = create_group(db_session, scope=GroupScope.PERSONAL, owner_id=alice.id, name="Errands")
    create_group(db_session, scope=GroupScope.PERSONAL, owner_id=bob.id, name="Reading")
    make_task("Buy milk", group="Errands")
    make_task("Post letter", group="Errands")

    page = browse_groups(db_session, scope=GroupScope.PERSONAL)
    counts = {item.group.name: item.task_count for item in page.items}
    only_alice = browse_groups(db_session, scope=GroupScope.PERSONAL, owner_id=alice.id)
    searched = browse_groups(db_session, scope=GroupScope.PERSONAL, search="read")

    assert page.total == 2
    assert counts == {"Errands": 2, "Reading": 0}
    assert [item.group.id for item in only_alice.items] == [errands.id]
    assert [item.group.name for item in searched.items] == ["Reading"]


def test_team_group_detail_lists_the_team_tasks(db_session, make_user, make_team, make_task):
    owner = make_user()
    core = make_team("Core", owner)
    ops = make_team("Ops", owner)
    sprint = create_group(db_session, scope=GroupScope.TEAM, owner_id=core.id, name="Sprint")
    filed = make_task("Fix login", team_id=core.id, team_group="Sprint")
    make_task("Other team", team_id=ops.id, team_group="Sprint")

    detail = get_group_detail(db_session, scope=GroupScope.TEAM, node_id=sprint.id)
    page = browse_groups(db_session, scope=GroupScope.TEAM, owner_id=core.id)

    assert [task.id for task in detail.tasks] == [filed.id]
    assert [(item.group.id, item.task_count) for item in page.items] == [(sprint.id, 1)]
    with pytest.raises(NotFoundError):
        get_group_detail(db_session, scope=GroupScope.PERSONAL, node_id=sprint.id + 100)
