"""In-memory repository implementation."""

import itertools
from typing import Dict, List, Optional

import structlog

from ..domain.errors import ConversationNotFoundError
from ..domain.models import DEFAULT_TITLE, GREETING, Conversation, Message
from .base import Repository

logger = structlog.get_logger()


class InMemoryRepository(Repository):
    """Process-local conversation storage.

    Nothing is persisted: a restart discards every conversation. Operations
    are not serialised, so two requests appending to the same conversation
    interleave in whatever order the event loop runs them.
    """

    def __init__(self) -> None:
        self._conversations: Dict[str, Conversation] = {}
        # Activity sequence numbers break updated_at ties in list().
        self._activity: Dict[str, int] = {}
        self._clock = itertools.count()
        logger.info("repository_initialized")

    def _touch(self, conversation_id: str) -> None:
        self._activity[conversation_id] = next(self._clock)

    def _require(self, conversation_id: str) -> Conversation:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            logger.warning("conversation_not_found", conversation_id=conversation_id)
            raise ConversationNotFoundError(conversation_id)
        return conversation

    async def create(
        self, conversation_id: Optional[str] = None, title: str = DEFAULT_TITLE
    ) -> Conversation:
        """Create a conversation seeded with the assistant greeting."""
        conversation = Conversation(title=title)
        if conversation_id is not None:
            conversation.id = conversation_id
        conversation.messages.append(
            Message(role="assistant", content=GREETING, timestamp=conversation.created_at)
        )
        self._conversations[conversation.id] = conversation
        self._touch(conversation.id)
        logger.info("conversation_created", conversation_id=conversation.id)
        return conversation

    async def get(self, conversation_id: str) -> Conversation:
        return self._require(conversation_id)

    async def list(self) -> List[Conversation]:
        """List all conversations, most recently active first."""
        return sorted(
            self._conversations.values(),
            key=lambda c: (c.updated_at, self._activity[c.id]),
            reverse=True,
        )

    async def append(self, conversation_id: str, message: Message) -> Message:
        """Add a message to a conversation and refresh its updated_at."""
        conversation = self._require(conversation_id)

        if conversation.messages:
            last = conversation.messages[-1].timestamp
            if message.timestamp < last:
                message.timestamp = last

        conversation.messages.append(message)
        conversation.updated_at = message.timestamp
        self._touch(conversation_id)

        logger.info(
            "message_added",
            conversation_id=conversation_id,
            message_role=message.role,
            message_count=len(conversation.messages),
        )
        return message

    async def set_title(self, conversation_id: str, title: str) -> None:
        self._require(conversation_id).title = title

    async def delete(self, conversation_id: str) -> bool:
        removed = self._conversations.pop(conversation_id, None) is not None
        self._activity.pop(conversation_id, None)
        if removed:
            logger.info("conversation_deleted", conversation_id=conversation_id)
        return removed
