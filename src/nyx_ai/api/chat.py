"""Conversation endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..repositories.base import Repository
from ..services.chat import ChatService
from ..services.extraction import TextExtractor
from .dependencies import get_chat_service, get_extractor, get_repository, store_upload

router = APIRouter(prefix="/chat")


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


@router.post("/new")
async def new_conversation(repository: Repository = Depends(get_repository)) -> dict:
    """Starts a new conversation thread"""
    conversation = await repository.create()
    return {"conversationId": conversation.id, "conversation": _dump(conversation)}


@router.get("")
async def list_conversations(repository: Repository = Depends(get_repository)) -> dict:
    """Lists conversations for the sidebar, most recent first"""
    conversations = await repository.list()
    return {"conversations": [_dump(c) for c in conversations]}


@router.get("/{conversation_id}")
async def get_conversation(
    conversation_id: str, repository: Repository = Depends(get_repository)
) -> dict:
    conversation = await repository.get(conversation_id)
    return {"conversation": _dump(conversation)}


@router.post("/message")
async def send_message(
    conversation_id: Optional[str] = Form(None, alias="conversationId"),
    message: Optional[str] = Form(None),
    url: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    chat_service: ChatService = Depends(get_chat_service),
    extractor: TextExtractor = Depends(get_extractor),
) -> dict:
    """
    Processes a user turn and generates the AI reply.
    Accepts typed text, an uploaded file and/or a URL to read.
    """
    upload = await store_upload(file, extractor)
    result = await chat_service.send_message(conversation_id, message, upload, url)
    return {
        "success": True,
        "conversationId": result.conversation.id,
        "response": result.response,
        "conversation": _dump(result.conversation),
    }


@router.delete("/{conversation_id}")
async def delete_conversation(
    conversation_id: str, repository: Repository = Depends(get_repository)
) -> dict:
    deleted = await repository.delete(conversation_id)
    return {
        "success": deleted,
        "message": "Conversation deleted" if deleted else "Conversation not found",
    }
