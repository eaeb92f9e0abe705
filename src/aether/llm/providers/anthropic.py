"""Anthropic Claude LLM provider implementation.

Uses the official Anthropic Python SDK for async chat completions.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from typing import Any

from anthropic import AsyncAnthropic

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation.

    Hidden design decisions:
    - Anthropic API client initialization
    - System message handling (top-level ``system`` parameter)
    - Mandatory max_tokens
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        self._model = model
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
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
        """Generate a chat completion using Anthropic Claude.

        Temperature is clamped to 1.0, the Messages API maximum.
        """
        model_to_use = model or self._model

        system_message = None
        anthropic_messages = []
        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                anthropic_messages.append({"role": msg.role, "content": msg.content})

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": anthropic_messages,
            "max_tokens": max_tokens or 4096,
            **kwargs
        }
        if temperature is not None:
            request_params["temperature"] = min(temperature, 1.0)
        if system_message:
            request_params["system"] = system_message

        response = await self._client.messages.create(**request_params)

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens
            }

        content = "".join(block.text for block in response.content if hasattr(block, "text"))

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
