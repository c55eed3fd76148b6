"""Service orchestrators."""

from .answer_service import AnswerService
from .conversation_service import ConversationController
from .document_service import DocumentService
from .generation_gateway import GenerationGateway, GenerationResult
from .intake_service import IntakeService, UploadedFile
from .message_service import MessageService
from .pdf_extractor import PdfExtractor
from .session_service import SessionService

__all__ = [
    "AnswerService",
    "ConversationController",
    "DocumentService",
    "GenerationGateway",
    "GenerationResult",
    "IntakeService",
    "UploadedFile",
    "MessageService",
    "PdfExtractor",
    "SessionService",
]
