"""Integration tests for the personal and team group endpoints."""

from __future__ import annotations


def _create(client, headers, **payload):
    response = client.post("/groups/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_requires_authentication(client):
    assert client.get("/groups/").status_code == 401
    assert client.get("/groups/", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_personal_group_lifecycle(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    work = _create(client, headers, name="Work", icon="💼")
    docs = _create(client, headers, name="Docs", parentId=work["id"])

    assert work["type"] == "custom"
    assert work["color"] == "#1890ff"
    assert docs["parentId"] == work["id"]

    tree = client.get("/groups/", headers=headers).json()
    assert [group["name"] for group in tree] == ["Work"]
    assert tree[0]["childIds"] == [docs["id"]]
    assert [child["name"] for child in tree[0]["children"]] == ["Docs"]

    updated = client.put(
        f"/groups/{docs['id']}", json={"name": " Papers ", "collapsed": True}, headers=headers
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Papers"
    assert updated.json()["collapsed"] is True

    deleted = client.delete(f"/groups/{work['id']}", headers=headers)
    assert deleted.status_code == 200
    assert sorted(deleted.json()["deletedIds"]) == sorted([work["id"], docs["id"]])
    assert client.get("/groups/", headers=headers).json() == []


def test_validation_and_ownership_errors(client, make_user, auth_headers):
    owner_headers = auth_headers(make_user())
    other_headers = auth_headers(make_user())
    group = _create(client, owner_headers, name="Mine")

    empty = client.post("/groups/", json={"name": "  "}, headers=owner_headers)
    assert empty.status_code == 400
    assert empty.json()["detail"] == "Group name is required"

    assert client.put(f"/groups/{group['id']}", json={"name": "X"}, headers=other_headers).status_code == 404
    assert client.delete(f"/groups/{group['id']}", headers=other_headers).status_code == 404
    assert client.post(
        "/groups/", json={"name": "Child", "parentId": group["id"]}, headers=other_headers
    ).status_code == 404


def test_reorder_distinguishes_missing_and_null_parent(client, make_user, auth_headers):
    headers = auth_headers(make_user())
    parent = _create(client, headers, name="Parent")
    child = _create(client, headers, name="Child", parentId=parent["id"])

    kept = client.put(f"/groups/{child['id']}/reorder", json={"newOrder": 4}, headers=headers)
    assert kept.status_code == 200
    assert kept.json()["parentId"] == parent["id"]
    assert kept.json()["order"] == 4

    top = client.put(
        f"/groups/{child['id']}/reorder",
        json={"newOrder": 1, "newParentId": None},
        headers=headers,
    )
    assert top.status_code == 200
    assert top.json()["parentId"] is None

    tree = client.get("/groups/", headers=headers).json()
    assert {group["name"]: group["childIds"] for group in tree} == {"Parent": [], "Child": []}


def test_reorder_into_descendant_is_rejected(client, make_user, auth_headers):
    headers = auth_headers(make_user())
    parent = _create(client, headers, name="Parent")
    child = _create(client, headers, name="Child", parentId=parent["id"])

    response = client.put(
        f"/groups/{parent['id']}/reorder",
        json={"newOrder": 0, "newParentId": child["id"]},
        headers=headers,
    )

    assert response.status_code == 400


def test_initialize_is_idempotent(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    first = client.post("/groups/initialize", headers=headers)
    second = client.post("/groups/initialize", headers=headers)

    assert first.json() == {
        "message": "Default groups initialized successfully",
        "initialized": True,
    }
    assert second.json() == {"message": "Groups already initialized", "initialized": False}
    tree = client.get("/groups/", headers=headers).json()
    assert [group["name"] for group in tree] == ["Work Projects", "Personal"]
    assert [child["name"] for child in tree[0]["children"]] == ["Learning"]
    assert {group["type"] for group in tree} == {"system"}


def test_team_groups_require_membership(client, make_user, make_team, auth_headers):
    owner = make_user()
    member = make_user()
    outsider = make_user()
    team = make_team("Core", owner, [member])

    created = client.post(
        f"/team-groups/{team.id}", json={"name": "Sprint"}, headers=auth_headers(member)
    )
    assert created.status_code == 201
    group_id = created.json()["id"]
    assert created.json()["scope"] == "team"
    assert created.json()["ownerId"] == team.id

    assert client.get(f"/team-groups/{team.id}", headers=auth_headers(outsider)).status_code == 403
    assert client.put(
        f"/team-groups/{group_id}", json={"name": "Hacked"}, headers=auth_headers(outsider)
    ).status_code == 403
    assert client.delete(f"/team-groups/{group_id}", headers=auth_headers(outsider)).status_code == 403
    assert client.get("/team-groups/9999", headers=auth_headers(owner)).status_code == 404

    renamed = client.put(
        f"/team-groups/{group_id}", json={"name": "Sprint 2"}, headers=auth_headers(owner)
    )
    assert renamed.json()["name"] == "Sprint 2"
    assert [g["name"] for g in client.get(f"/team-groups/{team.id}", headers=auth_headers(owner)).json()] == [
        "Sprint 2"
    ]


def test_team_groups_initialize_reorder_and_delete(client, make_user, make_team, auth_headers):
    owner = make_user()
    team = make_team("Core", owner)
    headers = auth_headers(owner)

    assert client.post(f"/team-groups/{team.id}/initialize", headers=headers).json()["initialized"]
    tree = client.get(f"/team-groups/{team.id}", headers=headers).json()
    work, personal = tree
    learning = work["children"][0]

    moved = client.put(
        f"/team-groups/{learning['id']}/reorder",
        json={"newOrder": 0, "newParentId": personal["id"]},
        headers=headers,
    )
    assert moved.status_code == 200

    tree = client.get(f"/team-groups/{team.id}", headers=headers).json()
    assert tree[0]["childIds"] == []
    assert tree[1]["childIds"] == [learning["id"]]

    assert client.delete(f"/team-groups/{personal['id']}", headers=headers).status_code == 200
    assert [g["name"] for g in client.get(f"/team-groups/{team.id}", headers=headers).json()] == [
        "Work Projects"
    ]


def test_personal_and_team_trees_do_not_mix(client, make_user, make_team, auth_headers):
    owner = make_user()
    team = make_team("Core", owner)
    headers = auth_headers(owner)

    client.post(f"/team-groups/{team.id}", json={"name": "Team only"}, headers=headers)

    assert client.get("/groups/", headers=headers).json() == []
