import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from .session import Base

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def uuid4_str():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    google_id = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    photo_url = Column(String(1000), nullable=True)
    subscription_tier = Column(String(50), nullable=False, default="free")
    api_calls_count = Column(Integer, nullable=False, default=0)
    last_api_call = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    saved_contacts = relationship("SavedContact", back_populates="user", cascade="all, delete-orphan")
    conversations = relationship("Conversation", back_populates="user", cascade="all, delete-orphan")


class SavedContact(Base):
    """A Contact the user chose to keep; unique per (user_id, contact_id)."""
    __tablename__ = "saved_contacts"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    contact_id = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    title = Column(String(500), nullable=True)
    company = Column(String(500), nullable=True)
    location = Column(String(500), nullable=True)
    industry = Column(String(255), nullable=True)
    emails = Column(JSONType, nullable=False, default=list)
    phones = Column(JSONType, nullable=False, default=list)
    linkedin_url = Column(String(1000), nullable=True)
    profile_image_url = Column(String(1000), nullable=True)
    relevance_score = Column(Float, nullable=False, default=0)
    summary = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    user = relationship("User", back_populates="saved_contacts")

    __table_args__ = (
        Index("ix_saved_contacts_user_contact", "user_id", "contact_id", unique=True),
        Index("ix_saved_contacts_user_created", "user_id", "created_at"),
    )


class Conversation(Base):
    __tablename__ = "conversations"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    contact_count = Column(Integer, nullable=False, default=0)
    follow_up_count = Column(Integer, nullable=False, default=0)
    is_archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="conversations")
    messages = relationship(
        "ConversationMessage",
        back_populates="conversation",
        order_by="ConversationMessage.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_conversations_user_archived", "user_id", "is_archived"),
        Index("ix_conversations_user_created", "user_id", "created_at"),
    )


class ConversationMessage(Base):
    """One transcript entry; position orders the transcript and never changes."""
    __tablename__ = "conversation_messages"

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    conversation_id = Column(
        String(36), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False)
    role = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    contacts = Column(JSONType, nullable=False, default=list)
    suggested_actions = Column(JSONType, nullable=False, default=list)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    conversation = relationship("Conversation", back_populates="messages")

    __table_args__ = (
        Index("ix_conversation_messages_conv_position", "conversation_id", "position", unique=True),
    )


class SearchHistory(Base):
    __tablename__ = "search_history"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    query = Column(Text, nullable=False)
    result_count = Column(Integer, nullable=False, default=0)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (Index("ix_search_history_user_timestamp", "user_id", "timestamp"),)
