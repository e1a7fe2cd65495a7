"""Single-shot text tools (summarize, grammar, flashcards, ...)."""

from typing import Optional, Union

import structlog

from ..domain.errors import FetchError, InvalidRequestError
from .extraction import TextExtractor, Upload
from .llm import LLMService
from .prompts import DEFAULT_SUMMARY_LENGTH, DEFAULT_SUMMARY_TYPE, build_prompt

logger = structlog.get_logger()


class SummarizeService:
    """Gathers the input text, wraps it in a tool prompt and asks the model."""

    def __init__(self, llm: LLMService, extractor: TextExtractor):
        self.llm = llm
        self.extractor = extractor

    async def gather(
        self, text: Optional[str], upload: Optional[Upload], url: Optional[str]
    ) -> str:
        content = text or ""
        if upload is not None:
            file_text = await self.extractor.extract_file_text(upload.path, upload.filename)
            content = f"{content}\n{file_text}" if content else file_text
        if url:
            try:
                url_text = await self.extractor.fetch_url_text(url)
                content = f"{content}\n{url_text}" if content else url_text
            except FetchError as e:
                logger.warning("url_processing_error", url=url, error=e.message)
                marker = f"[Could not fetch URL: {e.message}]"
                content = f"{content}\n{marker}" if content else marker
        return content

    async def run(
        self,
        tool: str = "summarize",
        text: Optional[str] = None,
        upload: Optional[Upload] = None,
        url: Optional[str] = None,
        summary_type: str = DEFAULT_SUMMARY_TYPE,
        summary_length: Union[int, str] = DEFAULT_SUMMARY_LENGTH,
    ) -> str:
        content = await self.gather(text, upload, url)
        if not content:
            raise InvalidRequestError("No content provided")

        prompt = build_prompt(tool, content, summary_type, summary_length)
        summary = await self.llm.complete(prompt)
        logger.info("summary_generated", tool=tool, input_length=len(content))
        return summary
