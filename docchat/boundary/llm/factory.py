"""
Answer model factory.

Selects the vendor adapter from GENERATION_PROVIDER and checks that the
matching API key is configured.

Dependencies: docchat.boundary.llm, docchat.configs
System role: Answer model instantiation and selection
"""

import logging

from docchat.boundary.llm.errors import missing_key_error
from docchat.boundary.llm.interface import AnswerModel
from docchat.configs.generation import GenerationSettings

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("gemini", "openai", "ollama")


def get_answer_model(config: GenerationSettings) -> AnswerModel:
    """
    Build the configured answer model.

    Args:
        config: Generation settings

    Returns:
        AnswerModel: Vendor adapter

    Raises:
        ProviderError: misconfigured_credentials when the vendor key is missing
        ValueError: If GENERATION_PROVIDER names an unsupported vendor
    """
    provider = config.provider.lower()

    if provider == "gemini":
        if not config.google_api_key:
            raise missing_key_error(provider, "GOOGLE_AI_API_KEY")
        from docchat.boundary.llm.gemini_model import GeminiAnswerModel

        logger.info(f"{__name__}:get_answer_model - Using Gemini model {config.gemini_model}")
        return GeminiAnswerModel(
            api_key=config.google_api_key,
            model_id=config.gemini_model,
            temperature=config.temperature,
            max_output_tokens=config.max_output_tokens,
        )

    if provider == "openai":
        if not config.openai_api_key:
            raise missing_key_error(provider, "OPENAI_API_KEY")
        from docchat.boundary.llm.openai_model import OpenAIAnswerModel

        logger.info(f"{__name__}:get_answer_model - Using OpenAI model {config.openai_model}")
        return OpenAIAnswerModel(
            api_key=config.openai_api_key,
            model_id=config.openai_model,
            temperature=config.temperature,
            max_output_tokens=config.max_output_tokens,
        )

    if provider == "ollama":
        from docchat.boundary.llm.ollama_model import OllamaAnswerModel

        logger.info(
            f"{__name__}:get_answer_model - Using Ollama model {config.ollama_model} "
            f"at {config.ollama_host}"
        )
        return OllamaAnswerModel(
            host=config.ollama_host,
            model_id=config.ollama_model,
            temperature=config.temperature,
            max_output_tokens=config.max_output_tokens,
        )

    raise ValueError(
        f"Unsupported generation provider: {config.provider} "
        f"(expected one of {', '.join(SUPPORTED_PROVIDERS)})"
    )
