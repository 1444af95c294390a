from abc import ABC, abstractmethod
from typing import Any

from .models import LLMResponse, ToolDeclaration


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which LLM provider backs the
    classification and verification calls.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Tool declaration and response format conversion
    - Timeouts and retries

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.generate_content(prompt)
        # Automatically cleaned up
    """

    @abstractmethod
    async def generate_content(
        self,
        prompt: str,
        *,
        model: str | None = None,
        tools: list[ToolDeclaration] | None = None,
        system_instruction: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate content for a single prompt.

        Args:
            prompt: Prompt text
            model: Model to use (None uses provider's default)
            tools: Functions the model may call while answering
            system_instruction: System-level directive for the model
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse with text, function calls and candidates

        Raises:
            Exception: Provider-specific errors during generation
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            # Suppress harmless cleanup errors from httpx/anyio
            if "Event loop is closed" not in str(e):
                raise
