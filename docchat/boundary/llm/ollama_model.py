"""
Ollama answer model.

Talks to a local or remote Ollama server through the official client. No API
key is involved.

Dependencies: ollama, docchat.boundary.llm
System role: Self-hosted vendor adapter
"""

import ollama

from docchat.boundary.llm.errors import classify_provider_error
from docchat.boundary.llm.interface import AnswerModel


class OllamaAnswerModel(AnswerModel):
    """Ollama adapter backed by ollama.AsyncClient."""

    provider = "ollama"

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model_id: str = "llama3.2",
        temperature: float = 0.2,
        max_output_tokens: int = 2048,
        client: ollama.AsyncClient | None = None,
    ) -> None:
        self._client = client or ollama.AsyncClient(host=host)
        self._model_id = model_id
        self._options = {"temperature": temperature, "num_predict": max_output_tokens}

    async def generate(self, prompt: str) -> str:
        try:
            resp = await self._client.chat(
                model=self._model_id,
                messages=[{"role": "user", "content": prompt}],
                options=self._options,
            )
        except Exception as e:
            raise classify_provider_error(e, self.provider) from e
        return (resp["message"]["content"] or "").strip()
