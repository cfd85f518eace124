"""Read access to chats and their messages."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Chat, ChatMessage
from app.infrastructure.models import ChatModel, MessageModel
from app.utils import ensure_utc


class ChatRepository:
    """Retrieve :class:`Chat` and :class:`ChatMessage` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_chat(self, chat_id: str) -> Chat | None:
        model = self.session.get(ChatModel, chat_id)
        if model is None:
            return None
        return Chat(
            id=model.id,
            participants=[str(value) for value in (model.participants or [])],
            participant_names=dict(model.participant_names or {}),
        )

    def get_message(self, message_id: str) -> ChatMessage | None:
        model = self.session.get(MessageModel, message_id)
        if model is None:
            return None
        return ChatMessage(
            id=model.id,
            chat_id=model.chat_id,
            sender_id=model.sender_id,
            content=model.content or "",
            sender_name=model.sender_name,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["ChatRepository"]
