"""LLM service backed by Groq (OpenAI-compatible API) or Google Gemini."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import google.generativeai as genai
import openai
import structlog

from ..config import Settings
from ..domain.errors import AIProcessingError

logger = structlog.get_logger()

SYSTEM_INTRO = "You are Nyx, a helpful AI assistant. Respond to the user's message."
CONTINUE_INTRO = "Continue the conversation based on this context:"


def format_transcript(history: List[Dict[str, str]]) -> str:
    """Flatten a chat history into a single completion prompt.

    The first message is the UI greeting and is left out of the context.
    """
    latest = history[-1]["content"]
    if len(history) <= 2:
        return f"{SYSTEM_INTRO}\n\nUser: {latest}\n\nAssistant:"

    prompt = f"{CONTINUE_INTRO}\n\n"
    for msg in history[1:-1]:
        speaker = "User" if msg["role"] == "user" else "Assistant"
        prompt += f"{speaker}: {msg['content']}\n\n"
    prompt += f"User: {latest}\n\nAssistant:"
    return prompt


class LLMService(ABC):
    """Interface every AI provider implements."""

    name = "base"

    @abstractmethod
    async def chat(self, history: List[Dict[str, str]]) -> str:
        """Reply to the last turn of a role/content history."""

    async def complete(self, prompt: str) -> str:
        """Answer a single standalone prompt."""
        return await self.chat([{"role": "user", "content": prompt}])


class GroqService(LLMService):
    """Chat completions against Groq's OpenAI-compatible endpoint."""

    name = "groq"

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Optional[openai.AsyncOpenAI] = None

    @property
    def client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.settings.groq_api_key,
                base_url=self.settings.groq_base_url,
            )
            logger.info("llm_service_init", provider=self.name, model=self.settings.groq_model)
        return self._client

    async def chat(self, history: List[Dict[str, str]]) -> str:
        try:
            completion = await self.client.chat.completions.create(
                model=self.settings.groq_model,
                messages=history,
                temperature=self.settings.llm_temperature,
                max_tokens=self.settings.llm_max_tokens,
            )
            reply = completion.choices[0].message.content
        except Exception as e:
            logger.error("llm_request_failed", provider=self.name, error=str(e))
            raise AIProcessingError(str(e)) from e

        if not reply:
            logger.error("llm_empty_response", provider=self.name)
            raise AIProcessingError("Empty response from model")
        return reply


class GeminiService(LLMService):
    """Google Gemini model driven with a flattened transcript prompt."""

    name = "gemini"

    def __init__(self, settings: Settings):
        self.settings = settings
        self._model: Optional[genai.GenerativeModel] = None

    @property
    def model(self) -> genai.GenerativeModel:
        if self._model is None:
            genai.configure(api_key=self.settings.gemini_api_key)
            self._model = genai.GenerativeModel(
                self.settings.gemini_model,
                generation_config={
                    "temperature": self.settings.llm_temperature,
                    "max_output_tokens": self.settings.llm_max_tokens,
                },
            )
            logger.info("llm_service_init", provider=self.name, model=self.settings.gemini_model)
        return self._model

    async def _generate(self, prompt: str) -> str:
        try:
            response = await self.model.generate_content_async(prompt)
            reply = response.text
        except Exception as e:
            logger.error("llm_request_failed", provider=self.name, error=str(e))
            raise AIProcessingError(str(e)) from e

        if not reply:
            logger.error("llm_empty_response", provider=self.name)
            raise AIProcessingError("Empty response from model")
        return reply

    async def chat(self, history: List[Dict[str, str]]) -> str:
        return await self._generate(format_transcript(history))

    async def complete(self, prompt: str) -> str:
        return await self._generate(prompt)


def build_llm_service(settings: Settings) -> LLMService:
    """Pick the provider named in the settings."""
    if settings.llm_provider == "gemini":
        return GeminiService(settings)
    return GroqService(settings)
