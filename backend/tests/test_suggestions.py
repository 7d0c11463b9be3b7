"""Tests for the rule-based suggestion generator."""

from uuid import uuid4

from app.db.models import Artifact, SourceBinding
from app.services.suggestions import generate_suggestions


def _binding(type_: str, config: dict | None = None, name: str = "Source") -> SourceBinding:
    return SourceBinding(id=uuid4(), workspace_id=uuid4(), type=type_, name=name, config=config or {})


def _artifact(binding: SourceBinding, name: str, kind: str) -> Artifact:
    return Artifact(
        id=uuid4(),
        source_binding_id=binding.id,
        workspace_id=binding.workspace_id,
        name=name,
        kind=kind,
    )


def test_issue_tracker_interpolates_board_name():
    binding = _binding("issue_tracker", {"board_name": "Sprint 12", "board_id": 42})

    drafts = generate_suggestions([binding], [])

    assert len(drafts) == 6
    assert drafts[0].title == "View Kanban Board"
    assert drafts[0].description == "View the Kanban board for Sprint 12"
    assert drafts[0].action_kind == "view_kanban"
    assert all(d.action_config == {"board_id": 42} for d in drafts)
    assert all(d.source_binding_id == binding.id for d in drafts)
    assert all(d.artifact_id is None for d in drafts)


def test_issue_tracker_falls_back_without_board_name():
    drafts = generate_suggestions([_binding("issue_tracker")], [])

    assert drafts[0].description == "View the Kanban board for this project"
    assert drafts[0].action_config == {"board_id": None}


def test_drive_and_wiki_fallbacks():
    drafts = generate_suggestions([_binding("drive"), _binding("wiki", {"space_key": "ENG"})], [])

    drive, wiki = drafts[:6], drafts[6:]
    assert drive[0].description == "View all files in the connected folder"
    assert wiki[0].description == "View pages in the connected space"
    assert wiki[0].action_config == {"space_key": "ENG"}


def test_mailbox_template_queries():
    drafts = generate_suggestions([_binding("mailbox")], [])

    assert [d.action_kind for d in drafts] == [
        "view_inbox",
        "search_emails",
        "view_unread",
        "view_starred",
        "view_recent",
        "view_attachments",
        "view_by_label",
    ]
    assert drafts[2].action_config == {"query": "is:unread"}
    assert drafts[5].action_config == {"query": "has:attachment"}


def test_relational_db_emits_five():
    drafts = generate_suggestions([_binding("relational_db", {"database": "sales"})], [])

    assert [d.title for d in drafts] == [
        "Create Dashboard View",
        "Generate Data Report",
        "Query with Natural Language",
        "View Table Schema",
        "Export Data",
    ]


def test_doc_store_binding_has_no_binding_suggestions():
    assert generate_suggestions([_binding("doc_store")], []) == []


def test_document_artifact_yields_summarize_and_extract():
    binding = _binding("doc_store")
    artifact = _artifact(binding, "Plan.docx", "document")

    drafts = generate_suggestions([binding], [artifact])

    assert [d.title for d in drafts] == ["Summarize Document", "Extract Key Points"]
    assert drafts[0].description == 'Get a summary of "Plan.docx"'
    for draft in drafts:
        assert draft.artifact_id == artifact.id
        assert draft.source_binding_id == binding.id
        assert draft.action_config == {"artifact_id": str(artifact.id)}


def test_spreadsheet_and_unknown_kinds():
    binding = _binding("drive")
    sheet = _artifact(binding, "Budget.xlsx", "spreadsheet")
    image = _artifact(binding, "logo.png", "image")

    drafts = generate_suggestions([], [sheet, image])

    assert [d.action_kind for d in drafts] == ["visualize", "analyze_data"]


def test_binding_suggestions_precede_artifact_suggestions():
    jira = _binding("issue_tracker", {"board_name": "Core"})
    docs = _binding("doc_store")
    mail = _binding("mailbox")
    plan = _artifact(docs, "Plan.docx", "doc_store_document")

    drafts = generate_suggestions([jira, docs, mail], [plan])

    assert len(drafts) == 6 + 0 + 7 + 2
    assert {d.source_binding_id for d in drafts[:6]} == {jira.id}
    assert {d.source_binding_id for d in drafts[6:13]} == {mail.id}
    assert [d.artifact_id for d in drafts[13:]] == [plan.id, plan.id]


def test_generation_is_deterministic():
    bindings = [_binding("wiki", {"space_name": "Engineering"}), _binding("mailbox")]

    first = generate_suggestions(bindings, [])
    second = generate_suggestions(bindings, [])

    assert first == second
