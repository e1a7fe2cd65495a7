"""Tests for the chat orchestrator without the HTTP layer."""

import httpx
import pytest

from nyx_ai.domain.errors import AIProcessingError, InvalidRequestError
from nyx_ai.repositories.memory import InMemoryRepository
from nyx_ai.services.chat import FALLBACK_REPLY, ChatService
from nyx_ai.services.extraction import TextExtractor


def page(html, status=200):
    return httpx.MockTransport(lambda request: httpx.Response(status, html=html))


@pytest.fixture
def repository():
    return InMemoryRepository()


def make_service(repository, llm, tmp_path, transport=None):
    extractor = TextExtractor(upload_dir=str(tmp_path), transport=transport)
    return ChatService(repository, llm, extractor)


@pytest.mark.asyncio
async def test_title_follows_first_turn(repository, llm, tmp_path):
    service = make_service(repository, llm, tmp_path)
    conversation = await repository.create()

    await service.send_message(conversation.id, "What is the capital of Australia?")
    assert conversation.title == "What is the capital of Austral..."

    await service.send_message(conversation.id, "And of Canada?")
    assert conversation.title == "What is the capital of Austral..."


@pytest.mark.asyncio
async def test_lazy_conversation_without_message_uses_url_text(repository, llm, tmp_path):
    service = make_service(repository, llm, tmp_path, transport=page("<body><p>Hello page</p></body>"))

    result = await service.send_message("fresh", url="https://example.com")

    assert result.conversation.messages[1].content == "Hello page"
    assert result.conversation.title == "Hello page"


@pytest.mark.asyncio
async def test_url_content_is_appended(repository, llm, tmp_path):
    service = make_service(repository, llm, tmp_path, transport=page("<body>Article body</body>"))
    conversation = await repository.create()

    await service.send_message(conversation.id, "Summarise", url="https://example.com")

    assert conversation.messages[1].content == "Summarise\n\n[URL content]\nArticle body"


@pytest.mark.asyncio
async def test_empty_turn_does_not_create_conversation(repository, llm, tmp_path):
    service = make_service(repository, llm, tmp_path)

    with pytest.raises(InvalidRequestError):
        await service.send_message("ghost", "")

    assert await repository.list() == []


@pytest.mark.asyncio
async def test_failure_appends_fallback_and_raises(repository, llm, tmp_path):
    llm.fail = True
    service = make_service(repository, llm, tmp_path)
    conversation = await repository.create()

    with pytest.raises(AIProcessingError) as exc_info:
        await service.send_message(conversation.id, "hello")

    assert exc_info.value.details == "quota exceeded"
    assert [m.role for m in conversation.messages] == ["assistant", "user", "assistant"]
    assert conversation.messages[-1].content == FALLBACK_REPLY


@pytest.mark.asyncio
async def test_history_grows_with_each_turn(repository, llm, tmp_path):
    service = make_service(repository, llm, tmp_path)
    conversation = await repository.create()

    await service.send_message(conversation.id, "one")
    await service.send_message(conversation.id, "two")

    assert [len(h) for h in llm.histories] == [2, 4]
    assert llm.histories[1][-1] == {"role": "user", "content": "two"}
    assert len(conversation.messages) == 5
