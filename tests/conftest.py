"""Shared fixtures: isolated settings, a scripted model and a recording mailer."""

from typing import Dict, List

import pytest

from nyx_ai.api.app import create_app
from nyx_ai.config import Settings
from nyx_ai.domain.errors import AIProcessingError
from nyx_ai.services.email import Mailer
from nyx_ai.services.llm import LLMService


class FakeLLM(LLMService):
    """Echoes the last user turn, or fails when told to."""

    name = "fake"

    def __init__(self):
        self.histories: List[List[Dict[str, str]]] = []
        self.prompts: List[str] = []
        self.fail = False

    async def chat(self, history):
        self.histories.append(history)
        if self.fail:
            raise AIProcessingError("quota exceeded")
        return f"echo: {history[-1]['content']}"

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.fail:
            raise AIProcessingError("quota exceeded")
        return "a short summary"


class RecordingMailer(Mailer):
    """Keeps outgoing mail in memory instead of talking to SMTP."""

    def __init__(self, settings):
        super().__init__(settings)
        self.sent = []

    def dispatch(self, to_email, subject, html):
        self.sent.append({"to": to_email, "subject": subject, "html": html})


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        data_dir=str(tmp_path / "data"),
        upload_dir=str(tmp_path / "uploads"),
        email_user="ops@nyx.test",
        email_pass="secret",
    )


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def mailer(settings):
    return RecordingMailer(settings)


@pytest.fixture
def app(settings, llm, mailer):
    return create_app(settings=settings, llm_service=llm, mailer=mailer)
