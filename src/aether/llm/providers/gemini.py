"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async chat completions.
Reference: https://github.com/googleapis/python-genai

Gemini is the service the notebook kernel simulation was tuned against,
so it is the default provider.
"""

from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

# Relaxed so that code snippets (exploits in error messages, shell commands)
# are not blocked as dangerous content
DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Mapping chat roles onto Gemini contents and system instruction
    - Function calling disabled so cell code is never read as a tool call
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-3-flash-preview",
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-3-flash-preview, gemini-3-pro-preview, ...)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _convert_messages(self, messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
        """Split messages into a system instruction and Gemini contents."""
        system_instruction = None
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            else:
                role = "model" if msg.role == "assistant" else "user"
                contents.append(types.Content(role=role, parts=[types.Part(text=msg.content)]))

        return system_instruction, contents

    def _extract_content(self, response: types.GenerateContentResponse) -> str:
        """Join the text parts of the first candidate.

        Gemini can return no candidates (safety filtering) or parts without
        text; both yield an empty string.
        """
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if part.text]
                if texts:
                    return "".join(texts)

        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Google Gemini.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature (None leaves the service default)
            max_tokens: Maximum tokens to generate
            **kwargs: Additional GenerateContentConfig fields

        Returns:
            LLMResponse with generated content
        """
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)

        tool_config = types.ToolConfig(
            function_calling_config=types.FunctionCallingConfig(mode="NONE")
        )
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            tool_config=tool_config,
            **kwargs
        )
        if max_tokens is not None:
            config.max_output_tokens = max_tokens

        response = await self._client.aio.models.generate_content(
            model=model_to_use,
            contents=contents,
            config=config
        )

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0
            }

        return LLMResponse(
            content=self._extract_content(response),
            model=model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Gemini client.

        The GenAI client releases its transport on garbage collection;
        nothing to do here beyond satisfying the interface.
        """
