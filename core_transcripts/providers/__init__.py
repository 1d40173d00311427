"""
Abstract base classes for swappable LLM providers.
Concrete providers wrap a llama-index LLM and are built by LLMProviderFactory.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
import logging

from shared_utils.constants import LogScope
from shared_utils.error_handler import ModelError


class BaseProvider(ABC):
    """Base class for all providers."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @abstractmethod
    def initialize(self) -> None:
        """Initialize provider. Called after instantiation."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available and credentials are valid."""
        pass


class LLMProviderBase(BaseProvider):
    """Base for LLM providers backed by a llama-index ``complete()`` client."""

    _llm: Optional[Any] = None

    def is_available(self) -> bool:
        return self._llm is not None

    def generate(self, prompt: str, context: Optional[str] = None) -> str:
        """Generate a completion.

        Raises:
            ModelError: If the provider is not initialized, the call fails,
                or the response carries no text.
        """
        if not self.is_available():
            raise ModelError(f"{self.name} provider not initialized")

        full_prompt = f"{context}\n\n{prompt}" if context else prompt
        try:
            response = self._llm.complete(full_prompt)
        except Exception as e:
            self.logger.error(
                "LLM generation failed",
                extra={"scope": LogScope.PROVIDER, "provider": self.name, "error": str(e)}
            )
            raise ModelError(f"{self.name} generation failed: {e}", context={"provider": self.name}) from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise ModelError(f"{self.name} returned an empty response", context={"provider": self.name})
        return text
