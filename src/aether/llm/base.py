from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Abstract base class for chat-completion providers.

    This module hides the design decision of which remote service completes
    text. Implementations handle the provider-specific details:
    - API client setup and authentication
    - Request/response format conversion
    - Extracting text from provider responses

    Providers make exactly one request per call and let errors propagate.
    Recovering from failures is the caller's decision.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.chat_completion(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model used when a call does not name one."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Conversation, optionally starting with a system message
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature (0.0 to 2.0), None for the service default
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing generated content and metadata

        Raises:
            Exception: Provider-specific errors during generation
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the provider on exit.

        Note: Suppresses "Event loop is closed" errors during cleanup,
        a harmless race in httpx/anyio shutdown.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
