"""Text tool endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..services.extraction import TextExtractor
from ..services.prompts import DEFAULT_SUMMARY_LENGTH, DEFAULT_SUMMARY_TYPE
from ..services.summarize import SummarizeService
from .dependencies import get_extractor, get_summarize_service, store_upload

router = APIRouter()


@router.post("/summarize")
async def summarize(
    text: Optional[str] = Form(None),
    url: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    tool: str = Form("summarize"),
    summary_type: str = Form(DEFAULT_SUMMARY_TYPE, alias="summaryType"),
    summary_length: str = Form(str(DEFAULT_SUMMARY_LENGTH), alias="summaryLength"),
    service: SummarizeService = Depends(get_summarize_service),
    extractor: TextExtractor = Depends(get_extractor),
) -> dict:
    """Runs the selected tool over pasted text, a file or a web page"""
    upload = await store_upload(file, extractor)
    summary = await service.run(
        tool=tool,
        text=text,
        upload=upload,
        url=url,
        summary_type=summary_type,
        summary_length=summary_length,
    )
    return {"summary": summary}
