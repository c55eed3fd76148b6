"""
Document intake orchestrator.

Multi-file upload: non-PDF files are filtered out and counted, each PDF is
extracted and stored independently so one bad file does not sink the batch.
URL intake: the URL must end in .pdf; bytes come through the PDF proxy.

Dependencies: docchat.application.services, docchat.boundary.http
System role: Upload and URL intake use cases
"""

import logging
import time
import uuid
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

from docchat.application.adapters.row_adapter import summarize_document
from docchat.application.services.document_service import DocumentService
from docchat.application.services.pdf_extractor import PdfExtractor
from docchat.boundary.http.pdf_proxy_client import PdfProxyClient
from docchat.core.exceptions import ExtractionError, PersistenceError, ValidationError
from docchat.models.document import Document, DocumentSummary, FailedFile, UploadResult

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


@dataclass
class UploadedFile:
    """A file as received from the client."""

    name: str
    content_type: str | None
    data: bytes
    last_modified: int | None = None


def is_pdf_file(file: UploadedFile) -> bool:
    """Only files declared as application/pdf are accepted."""
    return (file.content_type or "").split(";")[0].strip().lower() == PDF_MIME_TYPE


def is_pdf_url(url: str) -> bool:
    """True when the URL path ends in .pdf (query string ignored)."""
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and parsed.path.lower().endswith(".pdf")


def file_name_from_url(url: str) -> str:
    """Default document name: the last path segment of the URL."""
    segment = urlparse(url).path.rstrip("/").split("/")[-1]
    return unquote(segment) or "document.pdf"


def now_millis() -> int:
    return int(time.time() * 1000)


class IntakeService:
    """Turns uploaded files and URLs into stored documents."""

    def __init__(
        self,
        documents: DocumentService,
        extractor: PdfExtractor,
        pdf_proxy: PdfProxyClient | None = None,
        max_upload_bytes: int | None = None,
    ) -> None:
        self.documents = documents
        self.extractor = extractor
        self.pdf_proxy = pdf_proxy
        self.max_upload_bytes = max_upload_bytes

    async def upload_files(self, files: list[UploadedFile]) -> UploadResult:
        """
        Process a batch of uploaded files.

        Args:
            files: Files as received

        Returns:
            UploadResult: Stored documents, skipped non-PDF count, per-file
            failures and low-yield warnings

        Raises:
            ValidationError: If the batch contains no PDF at all
        """
        pdf_files = [f for f in files if is_pdf_file(f)]
        skipped = len(files) - len(pdf_files)
        if skipped:
            logger.warning(f"{__name__}:upload_files - {skipped} non-PDF files were ignored")
        if not pdf_files:
            raise ValidationError("Please upload PDF files only.", field="files")

        result = UploadResult(skipped_non_pdf=skipped)
        for file in pdf_files:
            try:
                summary, low_yield = await self._ingest(
                    name=file.name,
                    data=file.data,
                    last_modified=file.last_modified or now_millis(),
                )
            except (ExtractionError, PersistenceError, ValidationError) as e:
                logger.error(f"{__name__}:upload_files - Error processing {file.name}: {e.message}")
                result.failed.append(FailedFile(name=file.name, error=e.message))
                continue
            result.documents.append(summary)
            if low_yield:
                result.warnings.append(low_yield_warning(file.name))

        logger.info(
            f"{__name__}:upload_files - Successfully processed {len(result.documents)} "
            f"of {len(pdf_files)} files"
        )
        return result

    async def import_from_url(self, url: str, file_name: str | None = None) -> tuple[DocumentSummary, list[str]]:
        """
        Fetch a PDF by URL and store it.

        Args:
            url: Address ending in .pdf
            file_name: Display name; defaults to the URL's last segment

        Returns:
            tuple: (stored document summary, warnings)

        Raises:
            ValidationError: URL does not end in .pdf
            RemoteFetchError: Proxy or upstream failure
            ExtractionError: PDF has no text
            PersistenceError: Store write failed
        """
        if not is_pdf_url(url):
            raise ValidationError("Please enter a valid PDF URL (ending in .pdf)", field="url")
        if self.pdf_proxy is None:
            raise ValidationError("URL intake is not configured", field="url")

        name = file_name or file_name_from_url(url)
        data = await self.pdf_proxy.fetch(url)
        summary, low_yield = await self._ingest(name=name, data=data, last_modified=now_millis())
        warnings = [low_yield_warning(name)] if low_yield else []
        return summary, warnings

    async def _ingest(self, name: str, data: bytes, last_modified: int) -> tuple[DocumentSummary, bool]:
        if self.max_upload_bytes is not None and len(data) > self.max_upload_bytes:
            raise ValidationError(
                f"{name} exceeds the {self.max_upload_bytes // (1024 * 1024)} MB upload limit",
                field="file",
            )

        extraction = await self.extractor.extract(data, name)
        document = Document(
            id=str(uuid.uuid4()),
            name=name,
            size=len(data),
            mime_type=PDF_MIME_TYPE,
            content=extraction.text,
            last_modified=last_modified,
        )
        if not await self.documents.save_document(document):
            raise PersistenceError("Failed to save document to database.", operation="save_document")
        return summarize_document(document), extraction.low_yield


def low_yield_warning(name: str) -> str:
    return (
        f"Very little text was extracted from {name}. "
        "The document might be scanned or have restricted permissions."
    )
