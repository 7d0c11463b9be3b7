"""API tests for suggestion regeneration."""

from conftest import create_artifact, create_binding, create_workspace


def _content(suggestions: list[dict]) -> list[tuple]:
    return [(s["title"], s["description"], s["action_kind"], s["action_config"]) for s in suggestions]


async def test_regenerate_for_document_artifact(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers)
    artifact = await create_artifact(client, binding["id"], headers, name="Plan.docx")

    response = await client.post(f"/workspaces/{workspace['id']}/suggestions/regenerate", headers=headers)

    assert response.status_code == 200
    suggestions = response.json()
    assert [s["title"] for s in suggestions] == ["Summarize Document", "Extract Key Points"]
    assert all(s["artifact_id"] == artifact["id"] for s in suggestions)
    assert all(s["source_binding_id"] == binding["id"] for s in suggestions)


async def test_regenerate_is_idempotent(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    await create_binding(
        client, workspace["id"], headers, type_="issue_tracker", name="Jira",
        config={"board_name": "Sprint 12", "board_id": 7},
    )
    mailbox = await create_binding(client, workspace["id"], headers, type_="mailbox", name="Gmail")
    await create_artifact(client, mailbox["id"], headers, name="Q3.xlsx", kind="spreadsheet")
    url = f"/workspaces/{workspace['id']}/suggestions/regenerate"

    first = (await client.post(url, headers=headers)).json()
    second = (await client.post(url, headers=headers)).json()

    assert len(first) == 6 + 7 + 2
    assert _content(first) == _content(second)
    assert {s["id"] for s in first}.isdisjoint({s["id"] for s in second})

    listed = (await client.get(f"/workspaces/{workspace['id']}/suggestions", headers=headers)).json()
    assert [s["id"] for s in listed] == [s["id"] for s in second]
    assert [s["position"] for s in listed] == list(range(len(listed)))


async def test_regenerate_replaces_stale_suggestions(client, alice):
    _, headers = alice
    workspace = await create_workspace(client, headers)
    binding = await create_binding(client, workspace["id"], headers, type_="wiki", name="Confluence")
    url = f"/workspaces/{workspace['id']}/suggestions/regenerate"
    assert len((await client.post(url, headers=headers)).json()) == 6

    await client.delete(f"/bindings/{binding['id']}", headers=headers)

    # Deleting the binding took its suggestions with it
    listed = (await client.get(f"/workspaces/{workspace['id']}/suggestions", headers=headers)).json()
    assert listed == []
    assert (await client.post(url, headers=headers)).json() == []


async def test_regenerate_requires_access(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    workspace = await create_workspace(client, alice_headers)

    response = await client.post(
        f"/workspaces/{workspace['id']}/suggestions/regenerate", headers=bob_headers
    )

    assert response.status_code == 403


async def test_delete_suggestion(client, alice, bob):
    _, headers = alice
    _, bob_headers = bob
    workspace = await create_workspace(client, headers)
    await create_binding(client, workspace["id"], headers, type_="relational_db", name="MySQL")
    suggestions = (
        await client.post(f"/workspaces/{workspace['id']}/suggestions/regenerate", headers=headers)
    ).json()
    target = suggestions[0]["id"]

    assert (await client.delete(f"/suggestions/{target}", headers=bob_headers)).status_code == 403
    response = await client.delete(f"/suggestions/{target}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    listed = (await client.get(f"/workspaces/{workspace['id']}/suggestions", headers=headers)).json()
    assert target not in {s["id"] for s in listed}
    assert len(listed) == 4
