"""Base repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.models import DEFAULT_TITLE, Conversation, Message


class Repository(ABC):
    """Abstract base class for conversation repositories."""

    @abstractmethod
    async def create(
        self, conversation_id: Optional[str] = None, title: str = DEFAULT_TITLE
    ) -> Conversation:
        """Create a conversation seeded with the assistant greeting."""
        pass

    @abstractmethod
    async def get(self, conversation_id: str) -> Conversation:
        """Retrieve a conversation by ID, raising if it does not exist."""
        pass

    @abstractmethod
    async def list(self) -> List[Conversation]:
        """List all conversations, most recently active first."""
        pass

    @abstractmethod
    async def append(self, conversation_id: str, message: Message) -> Message:
        """Add a message to the end of a conversation."""
        pass

    @abstractmethod
    async def set_title(self, conversation_id: str, title: str) -> None:
        """Replace a conversation's title."""
        pass

    @abstractmethod
    async def delete(self, conversation_id: str) -> bool:
        """Remove a conversation, returning whether it existed."""
        pass
