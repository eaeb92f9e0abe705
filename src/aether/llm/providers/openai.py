from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider implementation.

    Also serves any OpenAI-compatible endpoint (DeepSeek, local servers)
    through ``base_url``.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default chat model
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using the Chat Completions API."""
        model_to_use = model or self._model

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": [{"role": msg.role, "content": msg.content} for msg in messages],
            **kwargs
        }
        if temperature is not None:
            request_params["temperature"] = temperature
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        response = await self._client.chat.completions.create(**request_params)

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens
            }

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
