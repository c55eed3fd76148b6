"""
PDF text extraction using LangChain PyPDFLoader.

Page texts are joined with a blank line and trimmed. A document with no text
at all is an extraction failure; a document with very little text is kept
but flagged, since it is probably scanned or permission-restricted.

Dependencies: langchain_community.document_loaders
System role: First stage of document intake
"""

import asyncio
import logging
import os
import tempfile
from dataclasses import dataclass

from langchain_community.document_loaders import PyPDFLoader

from docchat.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


@dataclass
class ExtractionResult:
    """Extracted text of one PDF."""

    text: str
    page_count: int
    low_yield: bool


class PdfExtractor:
    """Extract plain text from PDF bytes."""

    def __init__(self, low_text_threshold: int = 100) -> None:
        """
        Initialize extractor.

        Args:
            low_text_threshold: Texts shorter than this are flagged as low yield
        """
        self.low_text_threshold = low_text_threshold

    async def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        """
        Extract text without blocking the event loop.

        Args:
            data: Raw PDF bytes
            file_name: Original name, for errors and logs

        Returns:
            ExtractionResult: Joined text, page count and low-yield flag

        Raises:
            ExtractionError: Unreadable PDF or no text at all
        """
        return await asyncio.to_thread(self.extract_sync, data, file_name)

    def extract_sync(self, data: bytes, file_name: str) -> ExtractionResult:
        """Synchronous variant of extract()."""
        if not data:
            raise ExtractionError(f"Error reading file: {file_name}", file_name=file_name)

        fd, path = tempfile.mkstemp(suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            try:
                pages = PyPDFLoader(path).load()
            except Exception as e:
                raise ExtractionError(
                    f"Error extracting text from {file_name}: {e}",
                    file_name=file_name,
                ) from e
        finally:
            os.unlink(path)

        text = PAGE_SEPARATOR.join(page.page_content for page in pages).strip()
        if not text:
            raise ExtractionError(
                f"No text could be extracted from {file_name}",
                file_name=file_name,
            )

        low_yield = len(text) < self.low_text_threshold
        if low_yield:
            logger.warning(
                f"{__name__}:extract - Very little text was extracted from {file_name} "
                f"({len(text)} characters)"
            )
        logger.info(
            f"{__name__}:extract - Extracted {len(text)} characters from "
            f"{len(pages)} pages of {file_name}"
        )
        return ExtractionResult(text=text, page_count=len(pages), low_yield=low_yield)
