"""API tests for workspace tasks."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from app.db.models import Task
from conftest import create_workspace


async def test_create_and_toggle(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)

    response = await client.post(
        f"/workspaces/{workspace['id']}/tasks",
        json={"text": "Send the report", "source": "Projects - Action Items"},
        headers=headers,
    )
    assert response.status_code == 201
    task = response.json()
    assert task["completed"] is False
    assert task["source"] == "Projects - Action Items"

    toggled = (await client.patch(f"/tasks/{task['id']}", json={}, headers=headers)).json()
    assert toggled["completed"] is True
    toggled = (await client.patch(f"/tasks/{task['id']}", json={}, headers=headers)).json()
    assert toggled["completed"] is False

    explicit = (await client.patch(f"/tasks/{task['id']}", json={"completed": False}, headers=headers)).json()
    assert explicit["completed"] is False


async def test_text_is_required(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)

    for body in ({}, {"text": "   "}):
        response = await client.post(f"/workspaces/{workspace['id']}/tasks", json=body, headers=headers)
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"


async def test_list_newest_first(client, db, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    now = datetime.now(timezone.utc)
    db.add_all(
        [
            Task(workspace_id=UUID(workspace["id"]), text="older", created_at=now - timedelta(hours=1)),
            Task(workspace_id=UUID(workspace["id"]), text="newer", created_at=now),
        ]
    )
    await db.commit()

    response = await client.get(f"/workspaces/{workspace['id']}/tasks", headers=headers)

    assert [t["text"] for t in response.json()] == ["newer", "older"]


async def test_tasks_respect_ownership(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    workspace = await create_workspace(client, alice_headers)
    task = (
        await client.post(f"/workspaces/{workspace['id']}/tasks", json={"text": "Private"}, headers=alice_headers)
    ).json()

    assert (await client.get(f"/workspaces/{workspace['id']}/tasks", headers=bob_headers)).status_code == 403
    assert (await client.patch(f"/tasks/{task['id']}", json={}, headers=bob_headers)).status_code == 403
    assert (await client.delete(f"/tasks/{task['id']}", headers=bob_headers)).status_code == 403

    response = await client.delete(f"/tasks/{task['id']}", headers=alice_headers)
    assert response.json() == {"success": True}
    assert (await client.get(f"/workspaces/{workspace['id']}/tasks", headers=alice_headers)).json() == []
