"""Tests for heuristic action-item extraction."""

from app.schemas.widgets import MailMessage
from app.services.action_items import (
    display_name,
    extract,
    extract_from_messages,
    message_text,
    render_markdown,
)


def _message(body: str = "", subject: str = "Hello", sender: str = "Jane Doe <jane@example.com>", **kwargs):
    return MailMessage.model_validate(
        {"from": sender, "subject": subject, "date": "2026-10-01", "text_body": body, **kwargs}
    )


def test_extract_finds_request_phrasing():
    actions = extract("Hi team. Please send the report by Friday. Thanks!")

    assert "Please send the report by Friday." in actions


def test_extract_drops_short_and_long_matches():
    assert extract("Please go.") == []
    assert extract("please " + "x" * 250) == []


def test_extract_is_case_insensitive():
    assert extract("URGENT: the server certificate expires tonight")


def test_duplicate_phrase_across_messages_is_kept_once():
    first = _message("Please send the report by Friday.", subject="Weekly sync", sender="Ann <ann@example.com>")
    second = _message("please send the report by Friday.", subject="Re: Weekly sync", sender="Bo <bo@example.com>")

    result = extract_from_messages([first, second])

    matching = [i for i in result.items if i.action.lower() == "please send the report by friday."]
    assert len(matching) == 1
    assert matching[0].sender == "Ann"
    assert matching[0].subject == "Weekly sync"


def test_action_item_serializes_sender_as_from():
    result = extract_from_messages([_message("Please send the report by Friday.", sender="Ann <ann@example.com>")])

    item = result.items[0]
    assert item.model_dump(by_alias=True) == {
        "from": "Ann",
        "subject": "Hello",
        "action": "Please send the report by Friday.",
        "date": "2026-10-01",
    }


def test_subject_keyword_adds_review_item():
    result = extract_from_messages([_message("", subject="Action required: renew license")])

    assert [i.action for i in result.items] == ["Review: Action required: renew license"]


def test_items_are_capped():
    body = " ".join(f"Please update section {n} of the handbook." for n in range(20))

    result = extract_from_messages([_message(body)], limit=10)

    assert len(result.items) == 10
    assert result.total_found > 10


def test_fallback_lists_subjects_when_nothing_matches():
    messages = [_message("Lunch was great.", subject="Lunch"), _message("", subject="")]

    result = extract_from_messages(messages)

    assert result.items == []
    assert [i.subject for i in result.to_review] == ["Lunch", "(no subject)"]


def test_only_first_messages_are_scanned():
    messages = [_message("Nothing here.", subject=f"Note {n}") for n in range(8)]

    result = extract_from_messages(messages, scan_limit=5)

    assert result.scanned == 5
    assert len(result.to_review) == 5


def test_html_body_is_rendered_to_text():
    message = _message(text_body=None, html_body="<p>Could you <b>confirm</b> the venue</p><p>for Tuesday?</p>")

    text = message_text(message)

    assert "<" not in text
    assert "Could you confirm the venue for Tuesday?" in text


def test_display_name_strips_address():
    assert display_name("Jane Doe <jane@example.com>") == "Jane Doe"
    assert display_name("jane@example.com") == "jane@example.com"


def test_render_markdown_lists_items_with_provenance():
    result = extract_from_messages([_message("Please send the report by Friday.", subject="Weekly sync")])

    content = render_markdown(result, "Projects")

    assert content.startswith('## Action Items from "Projects"')
    assert "1. **Please send the report by Friday.**" in content
    assert "*From:* Jane Doe (2026-10-01)" in content
    assert "*Re:* Weekly sync" in content


def test_render_markdown_fallback():
    result = extract_from_messages([_message("See you soon.", subject="Catch up")])

    content = render_markdown(result)

    assert "No explicit action items detected" in content
    assert "1. **Catch up** - Jane Doe (2026-10-01)" in content
