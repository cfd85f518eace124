"""Domain entities for chat conversations and their messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Chat:
    """Conversation shared between platform users."""

    id: str
    participants: list[str] = field(default_factory=list)
    participant_names: dict[str, str] = field(default_factory=dict)


@dataclass
class ChatMessage:
    """Single message posted in a :class:`Chat`."""

    id: str
    chat_id: str
    sender_id: str
    content: str
    sender_name: str | None = None
    created_at: datetime | None = None


__all__ = ["Chat", "ChatMessage"]
