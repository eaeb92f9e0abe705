"""Unit tests for the assistant session."""
import pytest

from aether.inference import ASSISTANT_UNAVAILABLE
from aether.notebook import AssistantSession, Role


class TestAsk:
    """Tests for AssistantSession.ask."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    async def test_blank_query_is_ignored(self, fake_client, query: str):
        session = AssistantSession(fake_client)

        assert session.ask(query) is None
        assert session.transcript == ()
        assert fake_client.assistant_calls == []

    @pytest.mark.asyncio
    async def test_hello_appends_user_then_ai(self, fake_client):
        session = AssistantSession(fake_client)

        task = session.ask("hello")

        assert [(m.role, m.text) for m in session.transcript] == [(Role.USER, "hello")]

        reply = await task

        assert reply == "Hello! How can I help?"
        assert [(m.role, m.text) for m in session.transcript] == [
            (Role.USER, "hello"),
            (Role.AI, "Hello! How can I help?"),
        ]

    @pytest.mark.asyncio
    async def test_raw_query_is_kept(self, fake_client):
        session = AssistantSession(fake_client)

        await session.ask("  how do I shard a dataset?  ")

        assert session.transcript[0].text == "  how do I shard a dataset?  "
        assert fake_client.assistant_calls[0][0] == "  how do I shard a dataset?  "

    @pytest.mark.asyncio
    async def test_pending_input_is_used_and_cleared(self, fake_client):
        session = AssistantSession(fake_client)
        session.pending_input = "what is LoRA?"

        task = session.ask()

        assert session.pending_input == ""
        await task
        assert session.transcript[0].text == "what is LoRA?"

    @pytest.mark.asyncio
    async def test_blank_pending_input_is_ignored(self, fake_client):
        session = AssistantSession(fake_client)
        session.pending_input = "  "

        assert session.ask() is None
        assert session.pending_input == "  "

    @pytest.mark.asyncio
    async def test_context_is_captured_at_ask_time(self, fake_client):
        state = {"cells": 2}
        session = AssistantSession(fake_client, context_provider=lambda: f"Cell count: {state['cells']}")

        task = session.ask("status?")
        state["cells"] = 5
        await task

        assert fake_client.assistant_calls == [("status?", "Cell count: 2")]

    @pytest.mark.asyncio
    async def test_no_context_provider_sends_none(self, fake_client):
        session = AssistantSession(fake_client)

        await session.ask("hi")

        assert fake_client.assistant_calls == [("hi", None)]

    @pytest.mark.asyncio
    async def test_transcript_is_chronological(self, fake_client):
        session = AssistantSession(fake_client)

        first = session.ask("one")
        second = session.ask("two")
        await first
        await second

        assert [m.role for m in session.transcript] == [Role.USER, Role.USER, Role.AI, Role.AI]
        assert [m.text for m in session.transcript][:2] == ["one", "two"]


class TestClear:
    @pytest.mark.asyncio
    async def test_clear_empties_transcript(self, fake_client):
        session = AssistantSession(fake_client)
        await session.ask("hello")

        session.clear()

        assert session.transcript == ()

    @pytest.mark.asyncio
    async def test_drain_waits_for_replies(self, fake_client):
        session = AssistantSession(fake_client)
        session.ask("a")
        session.ask("b")

        await session.drain()

        assert len(session.transcript) == 4


class TestAssistantFailure:
    @pytest.mark.asyncio
    async def test_raising_client_appends_unavailable(self, fake_client):
        async def boom(query, context=None):
            raise RuntimeError("assistant offline")

        fake_client.assistant_query = boom
        session = AssistantSession(fake_client)

        reply = await session.ask("hello")

        assert reply == ASSISTANT_UNAVAILABLE
        assert [(m.role, m.text) for m in session.transcript] == [
            (Role.USER, "hello"),
            (Role.AI, ASSISTANT_UNAVAILABLE),
        ]
