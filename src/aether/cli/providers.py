"""Provider factory functions for CLI.

Centralizes creation of the LLM provider and inference client from
environment variables. Hides configuration details from command
implementations.
"""

import os
from typing import Any

from rich.console import Console

from ..inference import LLMInferenceClient
from ..llm import create_llm_provider

# Default console for output
_console = Console()

DEFAULT_PROVIDER = "gemini"
DEFAULT_EXECUTION_MODEL = "gemini-3-pro-preview"
DEFAULT_ASSISTANT_MODEL = "gemini-3-flash-preview"

# (api key variable, model variable, default model) per provider
_PROVIDER_ENV = {
    "gemini": ("GEMINI_API_KEY", "GEMINI_ASSISTANT_MODEL", DEFAULT_ASSISTANT_MODEL),
    "openai": ("OPENAI_API_KEY", "OPENAI_CHAT_MODEL", "gpt-4o-mini"),
    "anthropic": ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL", "claude-sonnet-4-20250514"),
}


def provider_name() -> str:
    """Configured provider, with 'claude' accepted as an alias."""
    name = os.getenv("LLM_PROVIDER", DEFAULT_PROVIDER).lower()
    return "anthropic" if name == "claude" else name


def api_key_variable(provider: str) -> str | None:
    entry = _PROVIDER_ENV.get(provider)
    return entry[0] if entry else None


def _api_key(provider: str) -> str | None:
    key_var = api_key_variable(provider)
    if key_var is None:
        return None
    key = os.getenv(key_var)
    # Gemini deployments historically used a bare API_KEY
    if not key and provider == "gemini":
        key = os.getenv("API_KEY")
    return key


def get_llm(console: Console | None = None) -> Any | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (gemini, openai, anthropic; default: gemini)
        GEMINI_API_KEY: Gemini API key (API_KEY accepted as fallback)
        GEMINI_ASSISTANT_MODEL: Gemini default model (default: gemini-3-flash-preview)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
        ANTHROPIC_API_KEY: Anthropic API key (for anthropic provider)
        ANTHROPIC_MODEL: Anthropic model (default: claude-sonnet-4-20250514)
    """
    con = console or _console
    provider = provider_name()

    if provider not in _PROVIDER_ENV:
        con.print(f"[red]Error: Unknown LLM provider: {provider}[/red]")
        return None

    key_var, model_var, default_model = _PROVIDER_ENV[provider]
    api_key = _api_key(provider)
    if not api_key:
        con.print(f"[yellow]Warning: {key_var} not set, inference disabled[/yellow]")
        return None

    model = os.getenv(model_var, default_model)
    return create_llm_provider(provider, api_key=api_key, model=model)


def get_inference_client(console: Console | None = None) -> LLMInferenceClient | None:
    """Create the notebook's inference client from environment variables.

    With Gemini, execution simulation uses GEMINI_EXECUTION_MODEL (default:
    gemini-3-pro-preview); other providers use their configured model for
    both operations.

    Returns:
        Inference client, or None if no provider is configured
    """
    llm = get_llm(console)
    if llm is None:
        return None

    execution_model = None
    if provider_name() == "gemini":
        execution_model = os.getenv("GEMINI_EXECUTION_MODEL", DEFAULT_EXECUTION_MODEL)
    return LLMInferenceClient(llm, execution_model=execution_model)


def require_inference_client(console: Console | None = None) -> LLMInferenceClient:
    """Get the inference client, exiting if it is not configured.

    Raises:
        SystemExit: If the LLM provider is not configured
    """
    import typer

    con = console or _console
    client = get_inference_client(con)
    if client is None:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return client
