from typing import Any

from .base import LLMProvider
from .providers import AnthropicProvider, GeminiProvider, OpenAIProvider

SUPPORTED_PROVIDERS = ("gemini", "openai", "anthropic")


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: Provider type ('gemini', 'openai', 'anthropic' or 'claude')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-3-flash-preview')
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None
            For Anthropic (Claude):
                - api_key: str (required)
                - model: str (default: 'claude-sonnet-4-20250514')

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-3-flash-preview"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiProvider(**config)

    if provider_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        return OpenAIProvider(**config)

    if provider_lower in ("anthropic", "claude"):
        if "api_key" not in config:
            raise TypeError("Anthropic provider requires 'api_key' in config")
        return AnthropicProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: {', '.join(repr(p) for p in SUPPORTED_PROVIDERS)}"
    )
