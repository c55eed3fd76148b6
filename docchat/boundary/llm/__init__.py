"""
LLM vendor boundary layer.

Adapters that turn a prompt into answer text for Gemini, OpenAI and Ollama,
all behind AnswerModel. Vendor errors leave this package as ProviderError.

Dependencies: langchain_google_genai, langchain_openai, ollama
System role: Answer model adapters for the answer proxy
"""

from docchat.boundary.llm.interface import AnswerModel
from docchat.boundary.llm.errors import classify_provider_error, missing_key_error
from docchat.boundary.llm.factory import get_answer_model

__all__ = [
    "AnswerModel",
    "classify_provider_error",
    "missing_key_error",
    "get_answer_model",
]
