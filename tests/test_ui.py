"""Tests for the Textual TUI, driven headless through the Pilot API."""
import asyncio

import pytest

from aether.notebook import NotebookController
from aether.ui import (
    AetherStudioApp,
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ExperimentsPanel,
    LogLevel,
    NotebookPanel,
)


class TestAetherStudioApp:

    @pytest.mark.asyncio
    async def test_starts_with_sample_content(self, fake_client):
        controller = NotebookController.with_samples(fake_client)
        app = AetherStudioApp(controller)

        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.query_one(ExperimentsPanel).row_count == 2
            assert app.query_one(NotebookPanel).border_subtitle == "2 cells"
            assert app.sub_title == "Active Tab: notebook"

    @pytest.mark.asyncio
    async def test_add_and_run_training_cell(self, fake_client):
        controller = NotebookController(fake_client)
        app = AetherStudioApp(controller)

        async with app.run_test() as pilot:
            await app.run_action("add_cell('code')")
            await pilot.pause()
            cell = controller.cells.cells[0]
            controller.update_content(cell.id, "model.train()")

            await app.run_action("run_cell")
            await controller.drain()
            await pilot.pause()

            assert controller.cells.get(cell.id).output == "hi"
            assert app.query_one(ExperimentsPanel).row_count == 1

    @pytest.mark.asyncio
    async def test_run_all_ignores_repeat_while_running(self, fake_client):
        fake_client.gate = asyncio.Event()
        controller = NotebookController.with_samples(fake_client)
        app = AetherStudioApp(controller)

        async with app.run_test() as pilot:
            await app.run_action("run_all")
            await pilot.pause()
            await app.run_action("run_all")
            await pilot.pause()

            fake_client.gate.set()
            await app._run_all_task
            await pilot.pause()

            assert len(fake_client.execution_calls) == 1
            assert all(not cell.is_executing for cell in controller.cells)

    @pytest.mark.asyncio
    async def test_delete_empty_cell_without_confirmation(self, fake_client):
        controller = NotebookController(fake_client)
        app = AetherStudioApp(controller)

        async with app.run_test() as pilot:
            await app.run_action("add_cell('markdown')")
            await pilot.pause()

            await app.run_action("delete_cell")
            await pilot.pause()

            assert len(controller.cells) == 0

    @pytest.mark.asyncio
    async def test_next_view_changes_assistant_context(self, fake_client):
        controller = NotebookController(fake_client)
        app = AetherStudioApp(controller)

        async with app.run_test() as pilot:
            await app.run_action("next_view")
            await pilot.pause()

            assert controller.assistant_context() == "Active Tab: models, Cell count: 0"
            assert app.sub_title == "Active Tab: models"

    @pytest.mark.asyncio
    async def test_submitted_question_reaches_transcript(self, fake_client):
        controller = NotebookController(fake_client)
        app = AetherStudioApp(controller)

        async with app.run_test() as pilot:
            app.on_chat_input_bar_submitted(ChatInputBar.Submitted("hello"))
            await controller.drain()
            await pilot.pause()

            assert [m.text for m in controller.transcript] == ["hello", "Hello! How can I help?"]
            assert app.query_one(ChatHistoryWidget).border_subtitle == "2 messages"

    @pytest.mark.asyncio
    async def test_log_level_shows_debug_panel(self, fake_client):
        controller = NotebookController(fake_client)
        app = AetherStudioApp(controller, log_level="info")

        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(DebugPanel)
            assert panel.display is True
            assert panel.log_level == LogLevel.INFO
            assert panel.border_subtitle == "Level: INFO"
