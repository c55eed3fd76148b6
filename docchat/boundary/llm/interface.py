"""
Answer model interface.

Every LLM vendor sits behind this one method so the answer proxy never sees
a vendor payload.

Dependencies: abc
System role: Vendor-neutral seam for answer generation
"""

from abc import ABC, abstractmethod


class AnswerModel(ABC):
    """A model that turns a fully built prompt into answer text."""

    provider: str = "unknown"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Generate an answer for a prompt.

        Args:
            prompt: Complete prompt including document contents and question

        Returns:
            str: Answer text (may be empty; callers treat that as no response)

        Raises:
            ProviderError: Vendor failure normalized to a FailureKind
        """
