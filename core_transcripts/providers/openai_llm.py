"""
OpenAI LLM provider implementation.
"""

from llama_index.llms.openai import OpenAI

from core_transcripts.providers import LLMProviderBase
from shared_utils.constants import Defaults, LogScope


class OpenAILLMProvider(LLMProviderBase):
    """OpenAI LLM provider."""

    def __init__(
        self,
        model_id: str,
        api_key: str,
        temperature: float = Defaults.LLM_TEMPERATURE,
        max_output_tokens: int = Defaults.MAX_OUTPUT_TOKENS,
    ):
        super().__init__(name=f"OpenAILLM({model_id})")
        self.model_id = model_id
        self.api_key = api_key
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._llm = None

    def initialize(self) -> None:
        """Initialize OpenAI LLM client."""
        try:
            self._llm = OpenAI(
                model=self.model_id,
                api_key=self.api_key,
                temperature=self.temperature,
                max_tokens=self.max_output_tokens,
            )
            self.logger.info(
                "Initialized OpenAI LLM provider",
                extra={"scope": LogScope.PROVIDER, "model_id": self.model_id}
            )
        except Exception as e:
            self.logger.error(
                "Failed to initialize OpenAI LLM provider",
                extra={"scope": LogScope.PROVIDER, "error": str(e)}
            )
            raise
