"""SQLAlchemy models for chats and chat messages."""

from sqlalchemy import Column, DateTime, JSON, String, Text

from app.infrastructure.database import Base


class ChatModel(Base):
    """Database representation of a conversation."""

    __tablename__ = "chats"

    id = Column(String(36), primary_key=True)
    participants = Column(JSON, nullable=False, default=list)
    participant_names = Column(JSON, nullable=True)


class MessageModel(Base):
    """Database representation of a chat message."""

    __tablename__ = "messages"

    id = Column(String(36), primary_key=True)
    chat_id = Column(String(36), nullable=False, index=True)
    sender_id = Column(String(36), nullable=False)
    content = Column(Text, nullable=False, default="")
    sender_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(), nullable=True)


__all__ = ["ChatModel", "MessageModel"]
