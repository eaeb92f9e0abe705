from .anthropic import AnthropicProvider
from .gemini import GeminiProvider
from .openai import OpenAIProvider

__all__ = ["AnthropicProvider", "GeminiProvider", "OpenAIProvider"]
