"""Tests for the AI provider adapters."""

from types import SimpleNamespace

import pytest

from nyx_ai.config import Settings
from nyx_ai.domain.errors import AIProcessingError
from nyx_ai.services.llm import (
    GeminiService,
    GroqService,
    build_llm_service,
    format_transcript,
)

GREETING = {"role": "assistant", "content": "Hi! I'm Nyx. How can I help you today?"}


def fake_openai(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_build_llm_service_picks_provider():
    assert isinstance(build_llm_service(Settings(_env_file=None)), GroqService)
    assert isinstance(
        build_llm_service(Settings(_env_file=None, llm_provider="gemini")), GeminiService
    )


def test_first_turn_transcript():
    history = [GREETING, {"role": "user", "content": "hi"}]
    assert format_transcript(history) == (
        "You are Nyx, a helpful AI assistant. Respond to the user's message.\n\n"
        "User: hi\n\nAssistant:"
    )


def test_follow_up_transcript_skips_greeting():
    history = [
        GREETING,
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello!"},
        {"role": "user", "content": "how are you?"},
    ]
    assert format_transcript(history) == (
        "Continue the conversation based on this context:\n\n"
        "User: hi\n\n"
        "Assistant: hello!\n\n"
        "User: how are you?\n\nAssistant:"
    )


@pytest.mark.asyncio
async def test_groq_passes_history_and_settings():
    calls = []

    async def create(**kwargs):
        calls.append(kwargs)
        return completion("hello there")

    service = GroqService(Settings(_env_file=None, llm_max_tokens=123))
    service._client = fake_openai(create)
    history = [GREETING, {"role": "user", "content": "hi"}]

    assert await service.chat(history) == "hello there"
    assert calls[0]["messages"] == history
    assert calls[0]["model"] == "llama-3.1-8b-instant"
    assert calls[0]["max_tokens"] == 123


@pytest.mark.asyncio
async def test_groq_errors_are_wrapped():
    async def create(**kwargs):
        raise RuntimeError("rate limited")

    service = GroqService(Settings(_env_file=None))
    service._client = fake_openai(create)

    with pytest.raises(AIProcessingError) as exc_info:
        await service.complete("prompt")
    assert exc_info.value.details == "rate limited"


@pytest.mark.asyncio
async def test_groq_empty_reply_is_an_error():
    async def create(**kwargs):
        return completion(None)

    service = GroqService(Settings(_env_file=None))
    service._client = fake_openai(create)

    with pytest.raises(AIProcessingError):
        await service.chat([{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
async def test_gemini_sends_transcript():
    prompts = []

    async def generate_content_async(prompt):
        prompts.append(prompt)
        return SimpleNamespace(text="bonjour")

    service = GeminiService(Settings(_env_file=None, llm_provider="gemini"))
    service._model = SimpleNamespace(generate_content_async=generate_content_async)

    assert await service.chat([GREETING, {"role": "user", "content": "hi"}]) == "bonjour"
    assert prompts[0].endswith("User: hi\n\nAssistant:")

    assert await service.complete("raw prompt") == "bonjour"
    assert prompts[1] == "raw prompt"


@pytest.mark.asyncio
async def test_gemini_errors_are_wrapped():
    async def generate_content_async(prompt):
        raise ValueError("quota exhausted")

    service = GeminiService(Settings(_env_file=None, llm_provider="gemini"))
    service._model = SimpleNamespace(generate_content_async=generate_content_async)

    with pytest.raises(AIProcessingError) as exc_info:
        await service.complete("x")
    assert exc_info.value.details == "quota exhausted"
