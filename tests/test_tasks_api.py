# File: tests/test_tasks_api.py

import pytest

from conftest import API, make_task


@pytest.fixture()
def task(client, owner, project_with_member):
    _, headers = owner
    resp = make_task(client, headers, project_with_member["id"])
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_create_task_defaults(client, task, project_with_member):
    assert task["project"] == project_with_member["id"]
    assert task["progress"] == 0
    assert task["type"] == "task"
    assert task["isDisabled"] is False
    assert task["assignedTo"] == []
    assert task["dependencies"] == []


def test_member_can_create_task(client, member, project_with_member):
    _, headers = member
    resp = make_task(client, headers, project_with_member["id"], name="Member task")
    assert resp.status_code == 201


def test_create_task_unknown_project(client, owner):
    _, headers = owner
    resp = make_task(client, headers, "missing")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Project not found"


@pytest.mark.parametrize(
    "overrides",
    [
        {"progress": 101},
        {"progress": -1},
        {"type": "epic"},
        {"name": ""},
        {"description": "x" * 501},
        {"startDate": None},
    ],
)
def test_create_task_validation(client, owner, project, overrides):
    _, headers = owner
    resp = make_task(client, headers, project["id"], **overrides)
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_create_task_with_assignees_checks_membership(client, owner, member, outsider, project_with_member):
    _, headers = owner
    member_user, _ = member
    outsider_user, _ = outsider
    pid = project_with_member["id"]

    ok = make_task(client, headers, pid, assignedTo=[member_user["id"]])
    assert ok.status_code == 201
    assert [u["id"] for u in ok.json()["data"]["assignedTo"]] == [member_user["id"]]

    bad = make_task(client, headers, pid, assignedTo=[outsider_user["id"]])
    assert bad.status_code == 400


def test_create_task_unknown_dependency(client, owner, project):
    _, headers = owner
    resp = make_task(client, headers, project["id"], dependencies=["missing"])
    assert resp.status_code == 404


def test_list_tasks_by_project(client, owner, member, task, project_with_member):
    _, headers = member
    resp = client.get(f"{API}/tasks/project/{project_with_member['id']}", headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert body["data"][0]["id"] == task["id"]


def test_list_tasks_unknown_project(client, owner):
    _, headers = owner
    assert client.get(f"{API}/tasks/project/missing", headers=headers).status_code == 404


def test_get_task(client, member, outsider, task):
    _, member_headers = member
    _, outsider_headers = outsider
    assert client.get(f"{API}/tasks/{task['id']}", headers=member_headers).status_code == 200
    resp = client.get(f"{API}/tasks/{task['id']}", headers=outsider_headers)
    assert resp.status_code == 403
    assert client.get(f"{API}/tasks/missing", headers=member_headers).status_code == 404


def test_update_task_by_member(client, member, task):
    _, headers = member
    resp = client.put(
        f"{API}/tasks/{task['id']}",
        json={"name": "Design v2", "progress": 30, "isDisabled": True, "type": "milestone"},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["name"] == "Design v2"
    assert data["progress"] == 30
    assert data["isDisabled"] is True
    assert data["type"] == "milestone"


def test_update_task_rejects_project_and_assignees(client, owner, task, project):
    _, headers = owner
    assert client.put(f"{API}/tasks/{task['id']}", json={"project": project["id"]}, headers=headers).status_code == 400
    assert client.put(f"{API}/tasks/{task['id']}", json={"assignedTo": []}, headers=headers).status_code == 400


def test_update_task_dependencies_without_cycle_check(client, owner, task, project_with_member):
    _, headers = owner
    other = make_task(client, headers, project_with_member["id"], name="Build").json()["data"]

    resp = client.put(f"{API}/tasks/{other['id']}", json={"dependencies": [task["id"]]}, headers=headers)
    assert resp.status_code == 200
    assert [d["id"] for d in resp.json()["data"]["dependencies"]] == [task["id"]]
    assert resp.json()["data"]["dependencies"][0]["name"] == "Design"

    # Closing the loop is accepted as-is.
    resp = client.put(f"{API}/tasks/{task['id']}", json={"dependencies": [other["id"]]}, headers=headers)
    assert resp.status_code == 200


def test_outsider_is_refused_on_every_task_route(client, outsider, member, task):
    _, headers = outsider
    member_user, _ = member
    tid = task["id"]
    calls = [
        client.get(f"{API}/tasks/{tid}", headers=headers),
        client.put(f"{API}/tasks/{tid}", json={"name": "x"}, headers=headers),
        client.delete(f"{API}/tasks/{tid}", headers=headers),
        client.patch(f"{API}/tasks/{tid}/progress", json={"progress": 10}, headers=headers),
        client.post(f"{API}/tasks/{tid}/assign", json={"userId": member_user["id"]}, headers=headers),
        client.delete(f"{API}/tasks/{tid}/assign/{member_user['id']}", headers=headers),
    ]
    assert [c.status_code for c in calls] == [403] * len(calls)


@pytest.mark.parametrize("progress", [0, 100])
def test_progress_bounds_accepted(client, member, task, progress):
    _, headers = member
    resp = client.patch(f"{API}/tasks/{task['id']}/progress", json={"progress": progress}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["progress"] == progress


@pytest.mark.parametrize("body", [{"progress": 101}, {"progress": -1}, {}])
def test_progress_out_of_range_rejected(client, owner, task, body):
    _, headers = owner
    resp = client.patch(f"{API}/tasks/{task['id']}/progress", json=body, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["success"] is False

    stored = client.get(f"{API}/tasks/{task['id']}", headers=headers).json()["data"]
    assert stored["progress"] == 0


def test_progress_range_message(client, owner, task):
    _, headers = owner
    resp = client.patch(f"{API}/tasks/{task['id']}/progress", json={"progress": 101}, headers=headers)
    assert "Progress must be a number between 0 and 100" in resp.json()["error"]


def test_progress_update_unknown_task(client, owner):
    _, headers = owner
    resp = client.patch(f"{API}/tasks/missing/progress", json={"progress": 5}, headers=headers)
    assert resp.status_code == 404


def test_delete_task_owner_only(client, owner, member, task):
    _, member_headers = member
    assert client.delete(f"{API}/tasks/{task['id']}", headers=member_headers).status_code == 403

    _, owner_headers = owner
    resp = client.delete(f"{API}/tasks/{task['id']}", headers=owner_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {}}
    assert client.get(f"{API}/tasks/{task['id']}", headers=owner_headers).status_code == 404


def test_delete_task_clears_dependency_links(client, owner, task, project_with_member):
    _, headers = owner
    other = make_task(client, headers, project_with_member["id"], name="Build", dependencies=[task["id"]])
    other_id = other.json()["data"]["id"]

    assert client.delete(f"{API}/tasks/{task['id']}", headers=headers).status_code == 200
    remaining = client.get(f"{API}/tasks/{other_id}", headers=headers).json()["data"]
    assert remaining["dependencies"] == []


def test_assign_and_unassign(client, owner, member, task):
    _, headers = owner
    member_user, _ = member
    tid = task["id"]

    resp = client.post(f"{API}/tasks/{tid}/assign", json={"userId": member_user["id"]}, headers=headers)
    assert resp.status_code == 200
    assert [u["id"] for u in resp.json()["data"]["assignedTo"]] == [member_user["id"]]

    again = client.post(f"{API}/tasks/{tid}/assign", json={"userId": member_user["id"]}, headers=headers)
    assert again.status_code == 400
    assert again.json()["error"] == "User is already assigned to this task"

    resp = client.delete(f"{API}/tasks/{tid}/assign/{member_user['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["assignedTo"] == []

    # Unassigning again is a no-op.
    resp = client.delete(f"{API}/tasks/{tid}/assign/{member_user['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["assignedTo"] == []


def test_owner_can_assign_self(client, owner, task):
    user, headers = owner
    resp = client.post(f"{API}/tasks/{task['id']}/assign", json={"userId": user["id"]}, headers=headers)
    assert resp.status_code == 200


def test_assign_requires_membership(client, owner, outsider, task):
    _, headers = owner
    stranger, _ = outsider
    resp = client.post(f"{API}/tasks/{task['id']}/assign", json={"userId": stranger["id"]}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "User must be a member of the project to be assigned to a task"


def test_assign_missing_user_id(client, owner, task):
    _, headers = owner
    resp = client.post(f"{API}/tasks/{task['id']}/assign", json={}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Please provide a user ID"


def test_assign_unknown_user(client, owner, task):
    _, headers = owner
    resp = client.post(f"{API}/tasks/{task['id']}/assign", json={"userId": "ghost"}, headers=headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "User not found"


def test_member_cannot_assign(client, member, task):
    member_user, headers = member
    resp = client.post(f"{API}/tasks/{task['id']}/assign", json={"userId": member_user["id"]}, headers=headers)
    assert resp.status_code == 403


def test_assignment_survives_membership_removal(client, owner, member, task, project_with_member):
    _, headers = owner
    member_user, _ = member
    client.post(f"{API}/tasks/{task['id']}/assign", json={"userId": member_user["id"]}, headers=headers)
    client.delete(f"{API}/projects/{project_with_member['id']}/members/{member_user['id']}", headers=headers)

    stored = client.get(f"{API}/tasks/{task['id']}", headers=headers).json()["data"]
    assert [u["id"] for u in stored["assignedTo"]] == [member_user["id"]]


def test_owner_member_scenario(client, register):
    owner_user, owner_headers = register("Olivia Owner", "o@example.com")
    _, member_headers = register("Max Member", "m@example.com")

    project = client.post(
        f"{API}/projects/",
        json={
            "name": "P",
            "description": "Scenario",
            "startDate": "2024-01-01T00:00:00",
            "endDate": "2024-12-31T00:00:00",
        },
        headers=owner_headers,
    ).json()["data"]
    added = client.post(f"{API}/projects/{project['id']}/members", json={"email": "m@example.com"}, headers=owner_headers)
    assert added.status_code == 200

    t1 = make_task(client, owner_headers, project["id"], name="T1", progress=0).json()["data"]
    make_task(client, owner_headers, project["id"], name="T2", progress=100)

    detail = client.get(f"{API}/projects/{project['id']}", headers=owner_headers).json()["data"]
    assert detail["progress"] == 0.5

    resp = client.patch(f"{API}/tasks/{t1['id']}/progress", json={"progress": 50}, headers=member_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["progress"] == 50

    resp = client.delete(f"{API}/tasks/{t1['id']}", headers=member_headers)
    assert resp.status_code == 403
    assert resp.json() == {"success": False, "error": "Not authorized to delete this task"}


def test_create_task_without_trailing_slash(client, owner, project):
    _, headers = owner
    resp = client.post(
        f"{API}/tasks",
        json={
            "project": project["id"],
            "name": "Design",
            "startDate": "2024-01-01T00:00:00",
            "endDate": "2024-01-31T00:00:00",
        },
        headers=headers,
        follow_redirects=False,
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["project"] == project["id"]


@pytest.mark.parametrize("body", [{"progress": 101}, {"progress": -1}, {}])
def test_invalid_progress_rejected_before_task_lookup(client, owner, body):
    _, headers = owner
    resp = client.patch(f"{API}/tasks/missing/progress", json=body, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["success"] is False
