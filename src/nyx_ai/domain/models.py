"""Domain models for the chat application."""

from datetime import datetime, timezone
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_TITLE = "New Conversation"
LAZY_TITLE = "New Chat"
GREETING = "Hi! I'm Nyx. How can I help you today?"
TITLE_LENGTH = 30


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


def make_title(text: str) -> str:
    """Short conversation label built from the head of a message."""
    if len(text) > TITLE_LENGTH:
        return text[:TITLE_LENGTH] + "..."
    return text


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Message(CamelModel):
    """Message model."""

    role: Literal["user", "assistant"] = "user"
    content: str
    timestamp: datetime = Field(default_factory=utcnow)


class Conversation(CamelModel):
    """Conversation model."""

    id: str = Field(default_factory=new_id)
    title: str = DEFAULT_TITLE
    messages: List[Message] = []
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def history(self) -> List[dict]:
        """Role and content of every message, oldest first."""
        return [{"role": m.role, "content": m.content} for m in self.messages]


class WaitlistEntry(CamelModel):
    """A waitlist signup."""

    id: str = Field(default_factory=new_id)
    email: str
    name: str
    joined_at: datetime = Field(default_factory=utcnow)


class ContactEntry(CamelModel):
    """A contact form submission."""

    id: str = Field(default_factory=new_id)
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    submitted_at: datetime = Field(default_factory=utcnow)
