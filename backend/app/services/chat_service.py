"""Generative-text collaborator: summarization and context-grounded chat."""

import logging

from anthropic import APIError, AsyncAnthropic, PermissionDeniedError

from app.config import get_settings
from app.services.errors import CollaboratorFailure, InsufficientScope

logger = logging.getLogger(__name__)
settings = get_settings()

_SYSTEM_PROMPT = """You are a helpful AI assistant that helps users work with their connected data sources. You have access to the following data and context from the user's workspace:

{context}

Based on this context, help the user with their questions. Be concise, helpful, and reference specific information from the data sources when relevant. If you're unsure about something or the information isn't in the context, say so."""

_DOCUMENT_SUMMARY_PROMPT = """Summarize the following document very briefly. Format your response as:

**Key Points:**
• [one short bullet point]
• [one short bullet point]

**Action Items:**
• [short action item]
• [short action item]
• [short action item]

Keep each bullet point under 10 words. Be extremely concise.

Document:
{content}"""

_DATA_SUMMARY_PROMPT = """Analyze the following data and provide insights:

{content}"""

KEY_POINTS_PROMPT = """Extract from this document very briefly:

**Key Points:**
• [one short point under 10 words]
• [one short point under 10 words]

**Action Items:**
• [short action under 10 words]
• [short action under 10 words]
• [short action under 10 words]

Document:
{content}"""

# Artifact kinds summarized with the document template; everything else is
# treated as data.
DOCUMENT_KINDS = frozenset({"document", "doc_store_document"})


class ChatService:
    """
    Thin client over the Anthropic Messages API.

    Calls are single-shot: failures surface as CollaboratorFailure (or
    InsufficientScope for permission errors) and are never retried here.
    """

    def __init__(self, client: AsyncAnthropic | None = None):
        """Initialize Anthropic client."""
        self.client = client or AsyncAnthropic(api_key=settings.anthropic_api_key)

    async def summarize(self, text: str, kind: str = "document") -> str:
        """Summarize artifact content; documents get key points, data gets insights."""
        template = _DOCUMENT_SUMMARY_PROMPT if kind in DOCUMENT_KINDS else _DATA_SUMMARY_PROMPT
        return await self._complete(
            system=None,
            messages=[{"role": "user", "content": template.format(content=text)}],
        )

    async def chat(self, message: str, context: str, history: list[dict]) -> str:
        """
        Answer a user message grounded in a workspace context block.

        Args:
            message: Current user message
            context: Flat text built by the context aggregator ("" for none)
            history: Previous turns as dicts with 'role' and 'content'

        Returns:
            Assistant reply text
        """
        messages = [
            {"role": "user" if turn["role"] == "user" else "assistant", "content": turn["content"]}
            for turn in history
        ]
        messages.append({"role": "user", "content": message})
        return await self._complete(system=_SYSTEM_PROMPT.format(context=context), messages=messages)

    async def extract_key_points(self, text: str) -> str:
        """Key points and action items of a document, via a context-free chat turn."""
        return await self.chat(KEY_POINTS_PROMPT.format(content=text), "", [])

    async def _complete(self, *, system: str | None, messages: list[dict]) -> str:
        kwargs = {
            "model": settings.llm_model,
            "max_tokens": settings.llm_max_tokens,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system

        try:
            response = await self.client.messages.create(**kwargs)
        except PermissionDeniedError as e:
            logger.warning("LLM call rejected for insufficient permissions: %s", e)
            raise InsufficientScope(
                "The model API rejected the request for insufficient permissions."
            ) from e
        except APIError as e:
            logger.exception("LLM call failed")
            raise CollaboratorFailure(f"Failed to get response from model: {e}") from e

        parts = [block.text for block in response.content if getattr(block, "type", None) == "text"]
        if not parts:
            raise CollaboratorFailure("Model returned an empty response.")
        return "".join(parts)


# Singleton instance
chat_service = ChatService()
