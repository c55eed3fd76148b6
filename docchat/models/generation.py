"""
Answer generation schemas.

The normalized request/response contract between the generation gateway and
the answer proxy. Only document ids cross this boundary, never content.

Dependencies: pydantic
System role: Gateway <-> proxy wire contract
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from docchat.models.chat import ChatMessage


class GenerateRequest(BaseModel):
    """Body posted to the answer proxy."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str = ""
    document_ids: list[str] = Field(default_factory=list)


class GenerateResponse(BaseModel):
    """Successful answer proxy payload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str
    source_documents: list[str] | None = None
    page_number: str | None = None
    section_info: str | None = None
    paragraph_info: str | None = None


class GenerateErrorResponse(BaseModel):
    """Failed answer proxy payload."""

    error: str
    details: str | None = None
    kind: str | None = Field(default=None, description="FailureKind value when classified")


class AskRequest(BaseModel):
    """Request schema for POST /chat/ask."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str = Field(min_length=1)
    document_ids: list[str] | None = Field(
        default=None,
        description="Active documents; all stored documents when omitted",
    )
    session_id: str | None = None


class AskResponse(BaseModel):
    """Response schema for POST /chat/ask."""

    message: ChatMessage
    failure: str | None = Field(default=None, description="FailureKind value when generation failed")


class PdfProxyRequest(BaseModel):
    """Body posted to the PDF proxy."""

    url: str = ""


class PdfProxyResponse(BaseModel):
    """PDF proxy payload: the fetched file, base64 encoded."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: str
    content_type: str
    size: int


__all__ = [
    "AskRequest",
    "AskResponse",
    "GenerateErrorResponse",
    "GenerateRequest",
    "GenerateResponse",
    "PdfProxyRequest",
    "PdfProxyResponse",
]
