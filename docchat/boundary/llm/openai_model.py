"""
OpenAI answer model.

Dependencies: langchain_openai, docchat.boundary.llm
System role: OpenAI vendor adapter
"""

from langchain_openai import ChatOpenAI

from docchat.boundary.llm.errors import classify_provider_error
from docchat.boundary.llm.interface import AnswerModel
from docchat.boundary.llm.text import message_text


class OpenAIAnswerModel(AnswerModel):
    """OpenAI adapter backed by ChatOpenAI."""

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model_id: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_output_tokens: int = 2048,
    ) -> None:
        self._model = ChatOpenAI(
            model=model_id,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_output_tokens,
            max_retries=0,
        )

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._model.ainvoke(prompt)
        except Exception as e:
            raise classify_provider_error(e, self.provider) from e
        return message_text(response)
