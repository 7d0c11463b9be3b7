"""
Heuristic action-item extraction from mail messages.

This is best-effort enrichment, not a parser: a fixed, ordered list of
trigger phrases is matched against the plain text of each message and every
match of acceptable length becomes a candidate. False positives and misses
are expected. Callers only depend on extract() and extract_from_messages(),
so a model-based extractor can replace the patterns later.
"""

import re
from collections.abc import Sequence

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field

from app.config import get_settings
from app.schemas.widgets import MailMessage

settings = get_settings()

_TAIL = r"([^.!?\n]+[.!?]?)"

# Order matters: earlier patterns win when deduplication drops repeats.
ACTION_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"please\s+(?:can you\s+)?" + _TAIL,
        r"could you\s+" + _TAIL,
        r"need(?:s)?\s+(?:to|you to)\s+" + _TAIL,
        r"action\s*(?:item|required)?:?\s*" + _TAIL,
        r"todo:?\s*" + _TAIL,
        r"deadline:?\s*" + _TAIL,
        r"by\s+(?:end of day|eod|monday|tuesday|wednesday|thursday|friday|tomorrow|next week)"
        r"([^.!?\n]*[.!?]?)",
        r"urgent:?\s*" + _TAIL,
        r"asap\s*" + _TAIL,
        r"follow[- ]?up:?\s*" + _TAIL,
        r"reminder:?\s*" + _TAIL,
        r"schedule\s+(?:a\s+)?" + _TAIL,
        r"send\s+(?:me\s+)?(?:the\s+)?" + _TAIL,
        r"review\s+(?:the\s+)?" + _TAIL,
        r"confirm\s+" + _TAIL,
    )
]

SUBJECT_KEYWORDS = ("action", "urgent", "required", "deadline", "reminder", "follow up")

MIN_ACTION_LENGTH = 10
MAX_ACTION_LENGTH = 200
NO_SUBJECT = "(no subject)"


class ActionItem(BaseModel):
    """One extracted action with the message it came from."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(alias="from")
    subject: str
    action: str
    date: str


class ExtractionResult(BaseModel):
    """Output of a scan: either action items or, failing that, subjects to review."""

    items: list[ActionItem]
    to_review: list[ActionItem]
    total_found: int
    scanned: int


def extract(text: str) -> list[str]:
    """Return every trigger-phrase match in text, in pattern order."""
    actions = []
    for pattern in ACTION_PATTERNS:
        for match in pattern.finditer(text):
            action = match.group(0).strip()
            if MIN_ACTION_LENGTH < len(action) < MAX_ACTION_LENGTH:
                actions.append(action)
    return actions


def html_to_text(html: str) -> str:
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return re.sub(r"\s+", " ", text).strip()


def message_text(message: MailMessage) -> str:
    """Plain-text rendering of a message; the text part wins over HTML."""
    if message.text_body:
        return message.text_body
    if message.html_body:
        return html_to_text(message.html_body)
    return ""


def display_name(sender: str) -> str:
    """'Jane Doe <jane@example.com>' -> 'Jane Doe'."""
    return sender.split("<")[0].strip()


def _subject_flags_action(subject: str) -> bool:
    lowered = subject.lower()
    return any(keyword in lowered for keyword in SUBJECT_KEYWORDS)


def dedupe(items: Sequence[ActionItem], limit: int) -> list[ActionItem]:
    """Keep the first occurrence of each action (case-insensitive), up to limit."""
    seen: set[str] = set()
    unique = []
    for item in items:
        key = item.action.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
        if len(unique) >= limit:
            break
    return unique


def extract_from_messages(
    messages: Sequence[MailMessage],
    limit: int | None = None,
    scan_limit: int | None = None,
) -> ExtractionResult:
    """
    Scan the most recent messages for action items.

    Only the first scan_limit messages are read. When nothing matches, every
    scanned message is listed by subject so the result is never empty for a
    non-empty input.
    """
    limit = limit if limit is not None else settings.action_item_limit
    scan_limit = scan_limit if scan_limit is not None else settings.action_item_scan_limit
    scanned = list(messages[:scan_limit])

    found: list[ActionItem] = []
    for message in scanned:
        sender = display_name(message.sender)
        subject = message.subject or NO_SUBJECT
        for action in extract(message_text(message)):
            found.append(ActionItem(sender=sender, subject=subject, action=action, date=message.date))
        if message.subject and _subject_flags_action(message.subject):
            found.append(
                ActionItem(
                    sender=sender,
                    subject=subject,
                    action=f"Review: {message.subject}",
                    date=message.date,
                )
            )

    if found:
        return ExtractionResult(
            items=dedupe(found, limit),
            to_review=[],
            total_found=len(found),
            scanned=len(scanned),
        )

    to_review = [
        ActionItem(
            sender=display_name(message.sender),
            subject=message.subject or NO_SUBJECT,
            action=message.subject or NO_SUBJECT,
            date=message.date,
        )
        for message in scanned
    ]
    return ExtractionResult(items=[], to_review=to_review, total_found=0, scanned=len(scanned))


def render_markdown(result: ExtractionResult, label_name: str | None = None) -> str:
    """Render an extraction result as the widget's markdown body."""
    heading = f'## Action Items from "{label_name}"' if label_name else "## Action Items"
    lines = [heading, "", f"*Extracted from {result.scanned} most recent emails*", ""]

    if result.items:
        for index, item in enumerate(result.items, start=1):
            lines.append(f"{index}. **{item.action}**")
            lines.append(f"   - *From:* {item.sender} ({item.date})")
            lines.append(f"   - *Re:* {item.subject}")
            lines.append("")
        lines.append("---")
        lines.append(
            f"*{result.total_found} action items found across {result.scanned} emails*"
        )
    else:
        lines.append("No explicit action items detected. Recent emails to review:")
        lines.append("")
        for index, item in enumerate(result.to_review, start=1):
            lines.append(f"{index}. **{item.subject}** - {item.sender} ({item.date})")

    return "\n".join(lines)
