"""Application state controller.

NotebookController is the single owner of the studio state. Front-ends call
its operations and read snapshots; they never touch the components' sequences
directly.
"""

import asyncio
from collections.abc import Iterable

from ..inference import InferenceClient
from ..tracing import DebugCallback, Traceable
from .assistant import AssistantSession
from .cells import CellStore
from .dispatcher import ExecutionDispatcher
from .experiments import ExperimentDeriver
from .models import (
    AssistantMessage,
    Cell,
    CellType,
    Experiment,
    NotebookSnapshot,
    View,
)
from .samples import sample_cells, sample_experiments

AUTOSAVE_MESSAGE = "Auto-saving notebook..."


class NotebookController(Traceable):
    """Owns cells, experiments, assistant transcript and the active view.

    Example:
        controller = NotebookController(client)
        cell = controller.add_cell(CellType.CODE)
        controller.update_content(cell.id, "model.train()")
        await controller.execute_cell(cell.id)
    """

    def __init__(
        self,
        client: InferenceClient,
        cells: Iterable[Cell] = (),
        experiments: Iterable[Experiment] = (),
        view: View = View.NOTEBOOK,
    ) -> None:
        self._client = client
        self._view = view
        self.cells = CellStore(cells)
        self.experiments = ExperimentDeriver(experiments)
        self.dispatcher = ExecutionDispatcher(self.cells, client, self.experiments)
        self.assistant = AssistantSession(client, context_provider=self.assistant_context)

    @classmethod
    def with_samples(cls, client: InferenceClient) -> "NotebookController":
        """Controller preloaded with the welcome cells and sample experiments."""
        return cls(client, cells=sample_cells(), experiments=sample_experiments())

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        super().set_debug_callback(callback)
        # Propagate callback to all components
        for component in (self.cells, self.experiments, self.dispatcher, self.assistant, self._client):
            component.set_debug_callback(callback)

    @property
    def view(self) -> View:
        return self._view

    def switch_view(self, view: View | str) -> None:
        self._view = View(view)
        self._debug("debug", "CORE", f"Switched to {self._view.value}")

    def assistant_context(self) -> str:
        """Describe the current state for the assistant's system instruction."""
        return f"Active Tab: {self._view.value}, Cell count: {len(self.cells)}"

    # Cells

    def add_cell(self, cell_type: CellType | str) -> Cell:
        return self.cells.add_cell(cell_type)

    def update_content(self, cell_id: str, content: str) -> None:
        self.cells.update_content(cell_id, content)

    def delete_cell(self, cell_id: str) -> None:
        self.cells.delete_cell(cell_id)

    def execute_cell(self, cell_id: str) -> asyncio.Task[str] | None:
        return self.dispatcher.execute_cell(cell_id)

    async def execute_all(self) -> None:
        await self.dispatcher.execute_all()

    # Assistant

    def ask(self, query: str | None = None) -> asyncio.Task[str] | None:
        return self.assistant.ask(query)

    @property
    def transcript(self) -> tuple[AssistantMessage, ...]:
        return self.assistant.transcript

    # Lifecycle

    def autosave(self) -> None:
        """Persisting notebooks is not supported; the request is only logged."""
        self._debug("info", "CORE", AUTOSAVE_MESSAGE)

    def snapshot(self) -> NotebookSnapshot:
        return NotebookSnapshot(
            cells=self.cells.cells,
            experiments=self.experiments.experiments,
            transcript=self.assistant.transcript,
            view=self._view,
            pending_input=self.assistant.pending_input,
        )

    async def drain(self) -> None:
        """Wait for all outstanding executions and assistant queries."""
        await self.dispatcher.drain()
        await self.assistant.drain()

    async def close(self) -> None:
        await self.client.close()

    @property
    def client(self) -> InferenceClient:
        return self._client
