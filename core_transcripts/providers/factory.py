"""
Factory for creating the configured LLM provider.
"""

from typing import Optional
import logging

from core_transcripts.providers import LLMProviderBase
from core_transcripts.providers.bedrock_llm import BedrockLLMProvider
from core_transcripts.providers.gemini_llm import GeminiLLMProvider
from core_transcripts.providers.openai_llm import OpenAILLMProvider
from shared_utils.config_loader import Settings, get_settings
from shared_utils.constants import LLMProvider, LogScope
from shared_utils.error_handler import ConfigurationError


logger = logging.getLogger(__name__)


class LLMProviderFactory:
    """Factory for creating LLM providers."""

    @staticmethod
    def create(settings: Optional[Settings] = None) -> LLMProviderBase:
        """Create and initialize the configured LLM provider.

        Args:
            settings: Optional settings override (defaults to get_settings()).

        Returns:
            Initialized LLM provider.

        Raises:
            ConfigurationError: If the provider is unknown or misconfigured.
        """
        settings = settings or get_settings()
        llm_provider = settings.llm_provider

        logger.info(
            "Creating LLM provider",
            extra={"scope": LogScope.CONFIG, "provider": llm_provider}
        )

        if llm_provider == LLMProvider.GEMINI.value:
            if not settings.gemini_api_key:
                raise ConfigurationError("GEMINI_API_KEY not configured")
            provider: LLMProviderBase = GeminiLLMProvider(
                model_id=settings.gemini_model,
                api_key=settings.gemini_api_key,
                temperature=settings.llm_temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
            )

        elif llm_provider == LLMProvider.OPENAI.value:
            if not settings.openai_api_key:
                raise ConfigurationError("OPENAI_API_KEY not configured")
            provider = OpenAILLMProvider(
                model_id=settings.openai_llm_model_id,
                api_key=settings.openai_api_key,
                temperature=settings.llm_temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
            )

        elif llm_provider == LLMProvider.BEDROCK.value:
            if not settings.bedrock_region or not settings.bedrock_llm_model_id:
                raise ConfigurationError("BEDROCK_REGION or BEDROCK_LLM_MODEL_ID not configured")
            provider = BedrockLLMProvider(
                model_id=settings.bedrock_llm_model_id,
                region=settings.bedrock_region,
                temperature=settings.llm_temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
            )

        else:
            raise ConfigurationError(f"Unknown LLM provider: {llm_provider}")

        try:
            provider.initialize()
        except Exception as e:
            logger.error(
                "Failed to create LLM provider",
                extra={"scope": LogScope.CONFIG, "provider": llm_provider, "error": str(e)}
            )
            raise
        return provider
