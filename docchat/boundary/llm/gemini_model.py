"""
Gemini answer model.

Uses langchain_google_genai's chat model with the sampling parameters the
answer proxy uses (temperature 0.2, top_p 0.8, top_k 40).

Dependencies: langchain_google_genai, docchat.boundary.llm
System role: Google Gemini vendor adapter
"""

from langchain_google_genai import ChatGoogleGenerativeAI

from docchat.boundary.llm.errors import classify_provider_error
from docchat.boundary.llm.interface import AnswerModel
from docchat.boundary.llm.text import message_text


class GeminiAnswerModel(AnswerModel):
    """Gemini adapter backed by ChatGoogleGenerativeAI."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        model_id: str = "gemini-1.5-pro",
        temperature: float = 0.2,
        max_output_tokens: int = 2048,
    ) -> None:
        """
        Initialize Gemini adapter.

        Args:
            api_key: Google AI API key
            model_id: Gemini model identifier
            temperature: Sampling temperature
            max_output_tokens: Maximum answer length
        """
        self._model_id = model_id
        self._model = ChatGoogleGenerativeAI(
            model=model_id,
            google_api_key=api_key,
            temperature=temperature,
            top_p=0.8,
            top_k=40,
            max_output_tokens=max_output_tokens,
        )

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._model.ainvoke(prompt)
        except Exception as e:
            raise classify_provider_error(e, self.provider) from e
        return message_text(response)
