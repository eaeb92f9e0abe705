"""Unit tests for execution dispatch."""
import asyncio

import pytest

from aether.inference import EXECUTION_FAILED, InferenceClient
from aether.notebook import (
    CellStore,
    CellType,
    ExecutionDispatcher,
    ExperimentDeriver,
    ExperimentMetrics,
    ExperimentStatus,
)


def make_dispatcher(client):
    store = CellStore()
    deriver = ExperimentDeriver()
    return store, deriver, ExecutionDispatcher(store, client, deriver)


def code_cell(store: CellStore, content: str) -> str:
    cell = store.add_cell(CellType.CODE)
    store.update_content(cell.id, content)
    return cell.id


class TestExecuteCell:
    """Tests for ExecutionDispatcher.execute_cell."""

    @pytest.mark.asyncio
    async def test_code_cell_round_trip(self, fake_client):
        """Busy flag goes true then false and output is the client's text."""
        store, deriver, dispatcher = make_dispatcher(fake_client)
        cell_id = code_cell(store, "print('hi')")

        task = dispatcher.execute_cell(cell_id)

        assert task is not None
        assert store.get(cell_id).is_executing is True
        assert store.get(cell_id).output is None

        assert await task == "hi"

        cell = store.get(cell_id)
        assert cell.is_executing is False
        assert cell.output == "hi"
        assert fake_client.execution_calls == [("print('hi')", "code")]
        assert deriver.experiments == ()

    @pytest.mark.asyncio
    async def test_training_content_derives_experiment(self, fake_client):
        store, deriver, dispatcher = make_dispatcher(fake_client)
        cell_id = code_cell(store, "model.train()")

        await dispatcher.execute_cell(cell_id)

        assert len(deriver.experiments) == 1
        experiment = deriver.experiments[0]
        assert experiment.name == "Manual Training Session"
        assert experiment.status is ExperimentStatus.RUNNING
        assert experiment.metrics == ExperimentMetrics(accuracy=0, loss=1, epoch=0)

    @pytest.mark.asyncio
    async def test_experiment_derived_even_on_error_output(self, fake_client):
        fake_client.execution_reply = "SyntaxError: invalid syntax"
        store, deriver, dispatcher = make_dispatcher(fake_client)
        cell_id = code_cell(store, "TRAIN(((")

        await dispatcher.execute_cell(cell_id)

        assert len(deriver.experiments) == 1

    @pytest.mark.asyncio
    async def test_markdown_cell_makes_no_remote_call(self, fake_client):
        store, deriver, dispatcher = make_dispatcher(fake_client)
        cell = store.add_cell(CellType.MARKDOWN)
        store.update_content(cell.id, "# Results")

        assert dispatcher.execute_cell(cell.id) is None

        updated = store.get(cell.id)
        assert updated.output == ""
        assert updated.is_executing is False
        assert fake_client.execution_calls == []

    @pytest.mark.asyncio
    async def test_unknown_cell_is_ignored(self, fake_client):
        store, deriver, dispatcher = make_dispatcher(fake_client)
        code_cell(store, "x = 1")
        before = store.cells

        assert dispatcher.execute_cell("missing") is None
        assert store.cells is before
        assert fake_client.execution_calls == []

    @pytest.mark.asyncio
    async def test_uses_content_at_dispatch_time(self, fake_client):
        store, deriver, dispatcher = make_dispatcher(fake_client)
        cell_id = code_cell(store, "model.train()")

        task = dispatcher.execute_cell(cell_id)
        store.update_content(cell_id, "print('edited')")
        await task

        assert fake_client.execution_calls == [("model.train()", "code")]
        assert len(deriver.experiments) == 1
        assert store.get(cell_id).content == "print('edited')"

    @pytest.mark.asyncio
    async def test_edits_proceed_while_request_outstanding(self, fake_client):
        fake_client.gate = asyncio.Event()
        store, deriver, dispatcher = make_dispatcher(fake_client)
        running = code_cell(store, "import time")

        task = dispatcher.execute_cell(running)
        await asyncio.sleep(0)
        other = code_cell(store, "y = 2")
        assert dispatcher.pending == frozenset({task})

        fake_client.gate.set()
        await task

        assert store.get(running).output == "hi"
        assert store.get(other).output is None
        assert dispatcher.pending == frozenset()


class TestDeletedWhileInFlight:
    """A late completion must not resurrect a deleted cell."""

    @pytest.mark.asyncio
    async def test_late_completion_is_dropped(self, fake_client):
        fake_client.gate = asyncio.Event()
        store, deriver, dispatcher = make_dispatcher(fake_client)
        doomed = code_cell(store, "print('bye')")
        survivor = code_cell(store, "x = 1")

        task = dispatcher.execute_cell(doomed)
        await asyncio.sleep(0)
        dispatcher_view = store.cells
        store.delete_cell(doomed)
        after_delete = store.cells

        fake_client.gate.set()
        await task

        assert doomed in {cell.id for cell in dispatcher_view}
        assert store.cells == after_delete
        assert [cell.id for cell in store.cells] == [survivor]
        assert all(cell.output is None for cell in store.cells)

    @pytest.mark.asyncio
    async def test_late_training_completion_still_derives(self, fake_client):
        fake_client.gate = asyncio.Event()
        store, deriver, dispatcher = make_dispatcher(fake_client)
        doomed = code_cell(store, "trainer.fit()")

        task = dispatcher.execute_cell(doomed)
        store.delete_cell(doomed)
        fake_client.gate.set()
        await task

        assert len(store) == 0
        assert len(deriver.experiments) == 1


class OrderedClient(InferenceClient):
    """Releases each execution only when its own event is set."""

    def __init__(self):
        self.events: dict[str, asyncio.Event] = {}

    async def simulate_execution(self, content: str, cell_type: str) -> str:
        event = self.events.setdefault(content, asyncio.Event())
        await event.wait()
        return f"out:{content}"

    async def assistant_query(self, query: str, context: str | None = None) -> str:
        return ""


class TestReExecution:
    """Re-running a busy cell is allowed; the last completion wins."""

    @pytest.mark.asyncio
    async def test_last_resolved_wins(self):
        client = OrderedClient()
        store, deriver, dispatcher = make_dispatcher(client)
        cell_id = code_cell(store, "first")

        first = dispatcher.execute_cell(cell_id)
        store.update_content(cell_id, "second")
        second = dispatcher.execute_cell(cell_id)
        assert first is not second
        await asyncio.sleep(0)

        client.events["second"].set()
        await second
        assert store.get(cell_id).output == "out:second"

        client.events["first"].set()
        await first
        cell = store.get(cell_id)
        assert cell.output == "out:first"
        assert cell.is_executing is False


class TestExecuteAll:
    """Tests for running every cell."""

    @pytest.mark.asyncio
    async def test_runs_cells_in_order(self, fake_client):
        store, deriver, dispatcher = make_dispatcher(fake_client)
        store.add_cell(CellType.MARKDOWN)
        code_cell(store, "a = 1")
        code_cell(store, "model.train()")

        await dispatcher.execute_all()

        assert [content for content, _ in fake_client.execution_calls] == ["a = 1", "model.train()"]
        assert [cell.output for cell in store.cells] == ["", "hi", "hi"]
        assert len(deriver.experiments) == 1

    @pytest.mark.asyncio
    async def test_drain_waits_for_outstanding(self, fake_client):
        store, deriver, dispatcher = make_dispatcher(fake_client)
        ids = [code_cell(store, f"x = {i}") for i in range(3)]
        for cell_id in ids:
            dispatcher.execute_cell(cell_id)

        await dispatcher.drain()

        assert all(store.get(cell_id).output == "hi" for cell_id in ids)
        assert dispatcher.pending == frozenset()


class BrokenClient(InferenceClient):
    """Raises from both operations instead of returning sentinel text."""

    async def simulate_execution(self, content: str, cell_type: str) -> str:
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    async def assistant_query(self, query: str, context: str | None = None) -> str:
        raise RuntimeError("assistant offline")


class TestClientFailure:
    """A raising client still settles the cell with inline error text."""

    @pytest.mark.asyncio
    async def test_cell_settles_with_failure_text(self):
        store, deriver, dispatcher = make_dispatcher(BrokenClient())
        cell_id = code_cell(store, "model.train()")
        logged = []
        dispatcher.set_debug_callback(lambda level, component, message: logged.append((level, component)))

        output = await dispatcher.execute_cell(cell_id)

        cell = store.get(cell_id)
        assert output == EXECUTION_FAILED
        assert cell.is_executing is False
        assert cell.output == EXECUTION_FAILED
        assert len(deriver.experiments) == 1
        assert ("error", "Dispatch") in logged
        assert dispatcher.pending == frozenset()
