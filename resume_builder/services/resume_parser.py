"""PDF resume parsing.

Uses pdfplumber for text extraction and the LLM service to structure the
extracted text into profile, work, education, project and skill sections.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse
from urllib.request import url2pathname

import pdfplumber

from ..errors import ResumeParseError
from ..models import ParserConfig, StructuredResume
from .llm_service import LLMService

logger = logging.getLogger(__name__)


class ResumeParser(Protocol):
    """Protocol for the resume parsing collaborator."""

    async def parse(self, file_url: str) -> StructuredResume:
        """Parse the resume file behind ``file_url``."""
        ...


def file_url_to_path(file_url: str) -> Path:
    """Convert a ``file://`` URL into a local path."""
    parsed = urlparse(file_url)
    if parsed.scheme != "file":
        raise ResumeParseError(f"Unsupported resume location: {file_url}")
    return Path(url2pathname(parsed.path))


class PdfResumeParser:
    """Extracts PDF text with pdfplumber and structures it with an LLM.

    Usage:
        parser = PdfResumeParser(LLMService(config.llm), config.parser)
        structured = await parser.parse("file:///tmp/resume.pdf")
    """

    def __init__(self, llm: LLMService, config: ParserConfig):
        self.llm = llm
        self.config = config

    def extract_text(self, path: Path) -> str:
        """Extract text from the first ``max_pages`` pages."""
        with pdfplumber.open(path) as pdf:
            pages = pdf.pages[: self.config.max_pages]
            text = "\n".join(page.extract_text() or "" for page in pages)

        logger.debug(f"Extracted {len(text)} chars from {len(pages)} pages of {path.name}")
        return text

    async def parse(self, file_url: str) -> StructuredResume:
        """Parse a PDF resume into a StructuredResume.

        Raises:
            ResumeParseError: If no text can be extracted.
        """
        path = file_url_to_path(file_url)
        text = await asyncio.to_thread(self.extract_text, path)

        if not text.strip():
            raise ResumeParseError(f"No text could be extracted from {path.name}")

        if len(text) > self.config.max_text_length:
            logger.warning(
                f"Resume text truncated from {len(text)} to "
                f"{self.config.max_text_length} chars"
            )
            text = text[: self.config.max_text_length]

        return await self.llm.structure_resume(text)
