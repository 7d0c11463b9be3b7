"""API tests for source bindings and artifacts."""

import pytest

from app.config import get_settings
from app.services.errors import InsufficientScope
from conftest import create_artifact, create_binding, create_workspace


async def test_create_binding_keeps_extra_config(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)

    binding = await create_binding(
        client,
        workspace["id"],
        headers,
        type_="issue_tracker",
        name="Jira",
        config={"board_id": 12, "board_name": "Core", "sync_cursor": "abc"},
    )

    assert binding["status"] == "connected"
    assert binding["config"] == {"board_id": 12, "board_name": "Core", "sync_cursor": "abc"}


async def test_invalid_config_is_rejected(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)

    response = await client.post(
        f"/workspaces/{workspace['id']}/bindings",
        json={"type": "relational_db", "name": "MySQL", "config": {"port": "not-a-port"}},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


async def test_unknown_binding_type_is_rejected(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)

    response = await client.post(
        f"/workspaces/{workspace['id']}/bindings",
        json={"type": "fax", "name": "Fax"},
        headers=headers,
    )

    assert response.status_code == 422


async def test_update_binding(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers, type_="wiki", name="Wiki")

    response = await client.put(
        f"/bindings/{binding['id']}",
        json={"name": "Confluence", "config": {"space_name": "Engineering"}, "status": "error"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Confluence"
    assert response.json()["config"] == {"space_name": "Engineering"}
    assert response.json()["status"] == "error"


async def test_binding_list_and_delete(client, alice, bob):
    _, headers = alice
    _, bob_headers = bob
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)
    await create_artifact(client, binding["id"], headers)

    listed = (await client.get(f"/workspaces/{workspace['id']}/bindings", headers=headers)).json()
    assert [b["id"] for b in listed] == [binding["id"]]
    assert (await client.delete(f"/bindings/{binding['id']}", headers=bob_headers)).status_code == 403

    assert (await client.delete(f"/bindings/{binding['id']}", headers=headers)).status_code == 200
    assert (await client.get(f"/bindings/{binding['id']}/artifacts", headers=headers)).status_code == 404
    [summary] = (await client.get("/workspaces", headers=headers)).json()
    assert summary["artifact_count"] == 0


async def test_artifact_crud(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)
    artifact = await create_artifact(client, binding["id"], headers)

    assert artifact["workspace_id"] == workspace["id"]
    fetched = (await client.get(f"/artifacts/{artifact['id']}", headers=headers)).json()
    assert fetched["name"] == "Plan.docx"
    listed = (await client.get(f"/bindings/{binding['id']}/artifacts", headers=headers)).json()
    assert [a["id"] for a in listed] == [artifact["id"]]

    assert (await client.delete(f"/artifacts/{artifact['id']}", headers=headers)).status_code == 200
    assert (await client.get(f"/artifacts/{artifact['id']}", headers=headers)).status_code == 404


async def test_artifact_metadata_uses_metadata_key(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)

    response = await client.post(
        f"/bindings/{binding['id']}/artifacts",
        json={"name": "Budget.xlsx", "kind": "spreadsheet", "metadata": {"mime_type": "text/csv"}},
        headers=headers,
    )

    assert response.status_code == 201, response.text
    artifact = response.json()
    assert artifact["metadata"] == {"mime_type": "text/csv"}
    assert "metadata_json" not in artifact
    fetched = (await client.get(f"/artifacts/{artifact['id']}", headers=headers)).json()
    assert fetched["metadata"] == {"mime_type": "text/csv"}
    detail = (await client.get(f"/workspaces/{workspace['id']}", headers=headers)).json()
    assert detail["artifacts"][0]["metadata"] == {"mime_type": "text/csv"}


@pytest.fixture
def content_cap():
    settings = get_settings()
    previous = settings.artifact_content_max_chars
    settings.artifact_content_max_chars = 5
    yield
    settings.artifact_content_max_chars = previous


async def test_ingestion_cap(client, alice, content_cap):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)

    artifact = await create_artifact(client, binding["id"], headers, content="0123456789")

    assert artifact["content"] == "01234"


async def test_summarize_and_extract_points(client, alice, generator):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)
    artifact = await create_artifact(client, binding["id"], headers, kind="spreadsheet", content="q1,q2\n1,2")

    summary = (await client.post(f"/artifacts/{artifact['id']}/summarize", headers=headers)).json()
    assert summary == {
        "artifact_id": artifact["id"],
        "name": "Plan.docx",
        "summary": "Summary of 9 chars (spreadsheet)",
    }

    points = (await client.post(f"/artifacts/{artifact['id']}/extract-points", headers=headers)).json()
    assert points["points"] == "Here is what I found."

    # Nothing is persisted
    detail = (await client.get(f"/workspaces/{workspace['id']}", headers=headers)).json()
    assert detail["artifacts"][0]["content"] == "q1,q2\n1,2"


async def test_summarize_requires_content(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)
    artifact = await create_artifact(client, binding["id"], headers, content=None)

    response = await client.post(f"/artifacts/{artifact['id']}/summarize", headers=headers)

    assert response.status_code == 400


async def test_insufficient_scope_is_reported(client, alice, generator):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)
    artifact = await create_artifact(client, binding["id"], headers)
    generator.fail_with = InsufficientScope("Missing scope")

    response = await client.post(f"/artifacts/{artifact['id']}/summarize", headers=headers)

    assert response.status_code == 403
    assert response.json() == {"detail": "Missing scope", "code": "INSUFFICIENT_SCOPES"}
