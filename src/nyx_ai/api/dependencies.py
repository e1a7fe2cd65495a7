"""Request-scoped access to the services held on ``app.state``."""

from typing import Optional

from fastapi import Request, UploadFile

from ..repositories.base import Repository
from ..services.chat import ChatService
from ..services.extraction import TextExtractor, Upload
from ..services.submissions import SubmissionStore
from ..services.summarize import SummarizeService


def get_repository(request: Request) -> Repository:
    """Returns the conversation storage instance"""
    return request.app.state.repository


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_summarize_service(request: Request) -> SummarizeService:
    return request.app.state.summarize_service


def get_submission_store(request: Request) -> SubmissionStore:
    return request.app.state.submissions


def get_extractor(request: Request) -> TextExtractor:
    return request.app.state.extractor


async def store_upload(file: Optional[UploadFile], extractor: TextExtractor) -> Optional[Upload]:
    """Persist a multipart upload so the extractor can read it from disk."""
    if file is None or not file.filename:
        return None
    data = await file.read()
    path = await extractor.save_upload(file.filename, data)
    return Upload(filename=file.filename, path=path)
