"""
Bedrock LLM provider implementation.
"""

from llama_index.llms.bedrock import Bedrock

from core_transcripts.providers import LLMProviderBase
from shared_utils.constants import Defaults, LogScope


class BedrockLLMProvider(LLMProviderBase):
    """AWS Bedrock LLM provider (IAM credentials, no API key)."""

    def __init__(
        self,
        model_id: str,
        region: str,
        temperature: float = Defaults.LLM_TEMPERATURE,
        max_output_tokens: int = Defaults.MAX_OUTPUT_TOKENS,
    ):
        super().__init__(name=f"BedrockLLM({model_id})")
        self.model_id = model_id
        self.region = region
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._llm = None

    def initialize(self) -> None:
        """Initialize Bedrock LLM client."""
        try:
            self._llm = Bedrock(
                model=self.model_id,
                region_name=self.region,
                temperature=self.temperature,
                max_tokens=self.max_output_tokens,
            )
            self.logger.info(
                "Initialized Bedrock LLM provider",
                extra={"scope": LogScope.PROVIDER, "model_id": self.model_id, "region": self.region}
            )
        except Exception as e:
            self.logger.error(
                "Failed to initialize Bedrock LLM provider",
                extra={"scope": LogScope.PROVIDER, "error": str(e)}
            )
            raise
