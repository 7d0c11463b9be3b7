"""Domain services and external collaborators."""

from app.services.chat_service import chat_service

__all__ = ["chat_service"]
