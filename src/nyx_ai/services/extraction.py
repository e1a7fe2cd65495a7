"""Turn uploaded files and web pages into plain text for prompts."""

import asyncio
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
import pdfplumber
import structlog
from bs4 import BeautifulSoup

from ..domain.errors import FetchError

logger = structlog.get_logger()

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120 Safari/537.36"
    ),
    "Accept": "text/html",
}
BLOCKING_STATUSES = {401, 403, 429}
BLOCKED_MESSAGE = (
    "This website blocks automated access. Please paste the text directly or try another link."
)


@dataclass
class Upload:
    """An uploaded file already written to disk."""

    filename: str
    path: str


def _read_pdf(path: str) -> str:
    with pdfplumber.open(path) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages)


def _read_txt(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def html_to_text(html: str) -> str:
    """Visible text of the document body, trimmed."""
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body or soup
    for tag in body(["script", "style", "noscript"]):
        tag.decompose()
    return body.get_text().strip()


class TextExtractor:
    """Extraction adapter shared by the chat and summarize routes.

    ``transport`` lets tests swap the network for an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        upload_dir: str = "uploads",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.upload_dir = upload_dir
        self.timeout = timeout
        self.transport = transport

    async def save_upload(self, filename: str, data: bytes) -> str:
        """Write an upload to a temporary file and return its path."""

        def _write() -> str:
            os.makedirs(self.upload_dir, exist_ok=True)
            suffix = Path(filename).suffix
            fd, path = tempfile.mkstemp(dir=self.upload_dir, suffix=suffix)
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            return path

        return await asyncio.to_thread(_write)

    def discard(self, path: str) -> None:
        """Remove a stored upload that will not be read."""
        try:
            os.remove(path)
        except OSError as e:
            logger.error("temp_file_delete_failed", path=path, error=str(e))

    async def extract_file_text(self, path: str, filename: str) -> str:
        """Read a stored upload according to its filename extension.

        Never raises: unsupported types and read failures come back as marker
        strings. The file at ``path`` is removed before returning.
        """
        ext = Path(filename).suffix.lower()
        try:
            if ext == ".txt":
                return await asyncio.to_thread(_read_txt, path)
            if ext == ".pdf":
                return await asyncio.to_thread(_read_pdf, path)
            if ext == ".docx":
                return "DOCX parsing coming soon"
            return f"Unsupported file type: {ext}"
        except Exception as e:
            logger.error("file_extraction_failed", filename=filename, error=str(e))
            return f"Error reading file: {e}"
        finally:
            self.discard(path)

    async def fetch_url_text(self, url: str) -> str:
        """Fetch a page and return the text of its body.

        Raises FetchError with a readable reason on any failure.
        """
        try:
            async with httpx.AsyncClient(
                headers=BROWSER_HEADERS,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("url_fetch_failed", url=url, error=str(e))
            raise FetchError(f"Unable to reach this URL: {e}") from e

        if response.status_code in BLOCKING_STATUSES:
            logger.warning("url_fetch_blocked", url=url, status_code=response.status_code)
            raise FetchError(BLOCKED_MESSAGE)
        if not response.is_success:
            logger.warning("url_fetch_failed", url=url, status_code=response.status_code)
            raise FetchError(f"URL fetch failed with status code {response.status_code}")

        text = html_to_text(response.text)
        if not text:
            raise FetchError("No text found on this page.")
        return text
