"""
Gemini LLM provider implementation.
"""

from llama_index.llms.google_genai import GoogleGenAI

from core_transcripts.providers import LLMProviderBase
from shared_utils.constants import Defaults, LogScope


class GeminiLLMProvider(LLMProviderBase):
    """Google Gemini provider (default)."""

    def __init__(
        self,
        model_id: str,
        api_key: str,
        temperature: float = Defaults.LLM_TEMPERATURE,
        max_output_tokens: int = Defaults.MAX_OUTPUT_TOKENS,
    ):
        super().__init__(name=f"GeminiLLM({model_id})")
        self.model_id = model_id
        self.api_key = api_key
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._llm = None

    def initialize(self) -> None:
        """Initialize Gemini client."""
        try:
            self._llm = GoogleGenAI(
                model=self.model_id,
                api_key=self.api_key,
                temperature=self.temperature,
                max_tokens=self.max_output_tokens,
            )
            self.logger.info(
                "Initialized Gemini LLM provider",
                extra={"scope": LogScope.PROVIDER, "model_id": self.model_id}
            )
        except Exception as e:
            self.logger.error(
                "Failed to initialize Gemini LLM provider",
                extra={"scope": LogScope.PROVIDER, "error": str(e)}
            )
            raise
