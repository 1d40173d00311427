"""
Port interface for LLM text generation.

Concrete providers live in core_transcripts/providers/ (Gemini, OpenAI, Bedrock).
Services depend on this contract, not on a provider implementation.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class LLMProviderPort(Protocol):
    """Abstract interface for LLM text generation."""

    def generate(self, prompt: str, context: Optional[str] = None) -> str:
        """Generate text from a prompt.

        Args:
            prompt: Full prompt (instructions plus transcript).
            context: Optional context to prepend.

        Returns:
            Generated text string. No structure is guaranteed.

        Raises:
            ModelError: If the provider is unavailable or returns no text.
        """
        ...
