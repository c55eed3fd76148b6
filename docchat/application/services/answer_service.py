"""
Answer proxy service.

Server-side half of answer generation: validates {question, documentIds},
resolves ids to document content, builds the prompt, calls the configured
AnswerModel and returns the normalized payload.

Dependencies: docchat.boundary.llm, docchat.core
System role: Answer proxy use case
"""

import logging
from typing import Callable

from docchat.application.services.document_service import DocumentService
from docchat.boundary.llm.interface import AnswerModel
from docchat.core.answer_prompt import build_answer_prompt
from docchat.core.citations import parse_citations
from docchat.core.exceptions import (
    DocumentNotFoundError,
    FailureKind,
    ProviderError,
    ValidationError,
)
from docchat.models.generation import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)


class AnswerService:
    """Answers a question from the full text of the selected documents."""

    def __init__(
        self,
        documents: DocumentService,
        model_factory: Callable[[], AnswerModel],
    ) -> None:
        """
        Initialize answer service.

        Args:
            documents: Document store access
            model_factory: Builds the AnswerModel per call, so a missing key
                surfaces as misconfigured_credentials on the request
        """
        self.documents = documents
        self.model_factory = model_factory

    async def answer(self, request: GenerateRequest) -> GenerateResponse:
        """
        Produce an answer.

        Args:
            request: Question and document ids

        Returns:
            GenerateResponse: Answer text plus any parsed citation fields

        Raises:
            ValidationError: Missing question or empty id list
            DocumentNotFoundError: None of the ids resolve
            PersistenceError: Document lookup failed
            ProviderError: Vendor failure, missing key or empty answer
        """
        question = request.question.strip()
        if not question:
            raise ValidationError("Question is required", field="question")
        if not request.document_ids:
            raise ValidationError("At least one document ID is required", field="documentIds")

        logger.info(
            f"{__name__}:answer - Received question for {len(request.document_ids)} documents"
        )

        documents = await self.documents.get_documents(request.document_ids)
        if not documents:
            raise DocumentNotFoundError(request.document_ids)

        model = self.model_factory()
        prompt = build_answer_prompt(question, documents)
        raw_answer = await model.generate(prompt)
        if not raw_answer.strip():
            raise ProviderError(
                FailureKind.NO_RESPONSE,
                "No response generated from AI model",
                status_code=502,
                details={"provider": model.provider},
            )

        text, citations = parse_citations(raw_answer)
        logger.info(f"{__name__}:answer - Answer generated by {model.provider}")
        return GenerateResponse(text=text, **citations)
