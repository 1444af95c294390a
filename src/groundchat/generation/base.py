from abc import ABC, abstractmethod
from typing import Any


class GenerationBackend(ABC):
    """Abstract base class for the primary text-generation backend.

    This module hides the design decision of how replies are produced.
    Implementations must handle:
    - Transport and request encoding
    - Validation of the backend's reply
    - Timeouts and retries for transient failures

    Supports async context manager protocol for proper resource cleanup:
        async with backend:
            reply = await backend.generate(prompt)
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate a reply for a prompt.

        Args:
            prompt: Fully built prompt (context included)

        Returns:
            The generated text, never empty

        Raises:
            GenerationError: Transport failure, error status or invalid payload
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "GenerationBackend":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
