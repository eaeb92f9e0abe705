"""Execution dispatch for a single cell.

The request/response cycle is an asyncio task. The busy flag is set before
the task is created, and on completion the task delivers an
ExecutionCompleted message that the store applies only if the cell still
exists.
"""

import asyncio

from ..inference import EXECUTION_FAILED, InferenceClient
from ..tracing import Traceable
from .cells import CellStore
from .experiments import ExperimentDeriver
from .models import CellType, ExecutionCompleted, ExecutionStarted


class ExecutionDispatcher(Traceable):
    """Runs cells against the inference client and records the results.

    Re-dispatching a cell that is already executing is allowed; whichever
    request settles last determines the cell's output.
    """

    def __init__(
        self,
        store: CellStore,
        client: InferenceClient,
        deriver: ExperimentDeriver,
    ) -> None:
        self._store = store
        self._client = client
        self._deriver = deriver
        self._pending: set[asyncio.Task[str]] = set()

    @property
    def pending(self) -> frozenset[asyncio.Task[str]]:
        """Execution tasks that have not settled yet."""
        return frozenset(self._pending)

    def execute_cell(self, cell_id: str) -> asyncio.Task[str] | None:
        """Dispatch one cell for execution.

        Must be called from a running event loop. Returns immediately.

        Returns:
            The task performing the remote request, or None when no request
            was needed (unknown id, or markdown cell completed in place)
        """
        cell = self._store.get(cell_id)
        if cell is None:
            self._debug("debug", "Dispatch", f"Ignoring execution of unknown cell {cell_id}")
            return None

        if cell.type is CellType.MARKDOWN:
            self._complete(cell_id, "", cell.content)
            return None

        self._store.apply(ExecutionStarted(cell_id=cell_id))
        self._debug("info", "Dispatch", f"Executing cell {cell_id}")

        task = asyncio.get_running_loop().create_task(
            self._run(cell_id, cell.content, cell.type),
            name=f"execute-{cell_id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def execute_all(self) -> None:
        """Execute every cell in display order, one at a time."""
        for cell in self._store.cells:
            task = self.execute_cell(cell.id)
            if task is not None:
                await task

    async def drain(self) -> None:
        """Wait until every outstanding execution has settled."""
        while self._pending:
            await asyncio.gather(*self._pending)

    async def _run(self, cell_id: str, content: str, cell_type: CellType) -> str:
        try:
            output = await self._client.simulate_execution(content, cell_type.value)
        except Exception as e:
            self._debug("error", "Dispatch", f"Execution of cell {cell_id} failed: {e}")
            output = EXECUTION_FAILED
        self._complete(cell_id, output, content)
        return output

    def _complete(self, cell_id: str, output: str, content: str) -> None:
        applied = self._store.apply(ExecutionCompleted(cell_id=cell_id, output=output))
        if applied:
            self._debug("info", "Dispatch", f"Cell {cell_id} finished")
        else:
            self._debug("warning", "Dispatch", f"Dropped output for deleted cell {cell_id}")

        self._deriver.maybe_derive(content)
