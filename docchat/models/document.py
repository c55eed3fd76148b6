"""
Document domain models and schemas.

In-memory document representation and intake request/response schemas.

Dependencies: pydantic
System role: Document API contracts
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    """An uploaded PDF and its extracted text."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    size: int
    mime_type: str = "application/pdf"
    content: str
    last_modified: int = Field(description="Milliseconds since the epoch")


class DocumentSummary(BaseModel):
    """Document listing entry without the extracted text."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    size: int
    mime_type: str
    last_modified: int
    content_length: int


class FailedFile(BaseModel):
    """A file that could not be processed during intake."""

    name: str
    error: str


class UploadResult(BaseModel):
    """Outcome of a multi-file upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    documents: list[DocumentSummary] = Field(default_factory=list)
    skipped_non_pdf: int = Field(default=0, description="Number of non-PDF files filtered out")
    failed: list[FailedFile] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class UrlIntakeRequest(BaseModel):
    """Request schema for importing a PDF by URL."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str = Field(description="Address of a PDF; must end in .pdf")
    file_name: str | None = Field(default=None, description="Display name; defaults to the URL's last segment")
