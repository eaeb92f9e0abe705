"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from aether.inference import InferenceClient
from aether.llm import ChatMessage, LLMProvider, LLMResponse
from aether.prompts import clear_cache


class FakeInferenceClient(InferenceClient):
    """Inference client that records calls and answers from canned text.

    Set ``gate`` to an asyncio.Event to hold every execution until it is set.
    """

    def __init__(self, execution_reply: str = "hi", assistant_reply: str = "Hello! How can I help?"):
        self.execution_reply = execution_reply
        self.assistant_reply = assistant_reply
        self.execution_calls: list[tuple[str, str]] = []
        self.assistant_calls: list[tuple[str, str | None]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def simulate_execution(self, content: str, cell_type: str) -> str:
        self.execution_calls.append((content, cell_type))
        if self.gate is not None:
            await self.gate.wait()
        return self.execution_reply

    async def assistant_query(self, query: str, context: str | None = None) -> str:
        self.assistant_calls.append((query, context))
        return self.assistant_reply

    async def close(self) -> None:
        self.closed = True


class FakeLLMProvider(LLMProvider):
    """LLM provider returning a fixed reply, or raising a fixed error."""

    def __init__(self, reply: str = "ok", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({"messages": messages, "model": model, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=model or self.model)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client():
    """Inference client with canned replies."""
    return FakeInferenceClient()


@pytest.fixture
def fake_llm():
    return FakeLLMProvider()


@pytest.fixture(autouse=True)
def fresh_prompts():
    """Prompt files are cached; start every test from the packaged ones."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }
