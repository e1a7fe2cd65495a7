"""Chat orchestration: one user turn in, one assistant turn out."""

from dataclasses import dataclass
from typing import Optional

import structlog

from ..domain.errors import (
    AIProcessingError,
    ConversationNotFoundError,
    FetchError,
    InvalidRequestError,
)
from ..domain.models import DEFAULT_TITLE, LAZY_TITLE, Conversation, Message, make_title
from ..repositories.base import Repository
from .extraction import TextExtractor, Upload
from .llm import LLMService

logger = structlog.get_logger()

FALLBACK_REPLY = "Sorry, I encountered an error. Please try again."


@dataclass
class ChatResult:
    conversation: Conversation
    response: str


def _join(base: str, addition: str) -> str:
    return f"{base}\n\n{addition}" if base else addition


class ChatService:
    """Builds the user turn, calls the model and records both sides."""

    def __init__(self, repository: Repository, llm: LLMService, extractor: TextExtractor):
        self.repository = repository
        self.llm = llm
        self.extractor = extractor

    async def compose(
        self, message: Optional[str], upload: Optional[Upload], url: Optional[str]
    ) -> str:
        """Combine typed text, file text and page text into one message."""
        composed = message or ""

        if upload is not None:
            try:
                file_text = await self.extractor.extract_file_text(upload.path, upload.filename)
                composed = _join(composed, f"[File attached]\n{file_text}" if composed else file_text)
            except Exception as e:
                logger.error("file_processing_error", filename=upload.filename, error=str(e))

        if url:
            try:
                url_text = await self.extractor.fetch_url_text(url)
                composed = _join(composed, f"[URL content]\n{url_text}" if composed else url_text)
            except FetchError as e:
                logger.warning("url_processing_error", url=url, error=e.message)
                composed = _join(composed, f"[Error fetching URL: {e.message}]")

        return composed

    async def _get_or_create(self, conversation_id: str, message: Optional[str]) -> Conversation:
        try:
            return await self.repository.get(conversation_id)
        except ConversationNotFoundError:
            title = make_title(message) if message else LAZY_TITLE
            return await self.repository.create(conversation_id=conversation_id, title=title)

    async def send_message(
        self,
        conversation_id: Optional[str],
        message: Optional[str] = None,
        upload: Optional[Upload] = None,
        url: Optional[str] = None,
    ) -> ChatResult:
        """Run one exchange with the model.

        On provider failure a fallback assistant message is still recorded
        before AIProcessingError is raised.
        """
        if not conversation_id or not conversation_id.strip():
            if upload is not None:
                self.extractor.discard(upload.path)
            raise InvalidRequestError("conversationId is required")

        composed = await self.compose(message, upload, url)
        if not composed.strip():
            raise InvalidRequestError("Message cannot be empty")

        conversation = await self._get_or_create(conversation_id, message)
        await self.repository.append(conversation_id, Message(role="user", content=composed))

        if len(conversation.messages) == 2 or conversation.title == DEFAULT_TITLE:
            await self.repository.set_title(conversation_id, make_title(composed))

        try:
            reply = await self.llm.chat(conversation.history())
        except AIProcessingError:
            await self.repository.append(
                conversation_id, Message(role="assistant", content=FALLBACK_REPLY)
            )
            raise

        await self.repository.append(conversation_id, Message(role="assistant", content=reply))
        logger.info(
            "message_processed",
            conversation_id=conversation_id,
            user_message_length=len(composed),
            ai_response_length=len(reply),
        )
        return ChatResult(conversation=conversation, response=reply)

