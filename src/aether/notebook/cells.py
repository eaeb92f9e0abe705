"""Ordered cell collection.

The store is the only owner of the cell sequence. Every mutation builds a
new tuple and swaps it in; snapshots handed out earlier never change.
"""

from collections.abc import Iterable, Iterator

from ..tracing import Traceable
from .models import Cell, CellType, Executed, ExecutionCompleted, ExecutionMessage, ExecutionStarted


class CellStore(Traceable):
    """Owns the ordered cells and their content, output and busy state.

    Operations addressed to an unknown id are silent no-ops.
    """

    def __init__(self, cells: Iterable[Cell] = ()) -> None:
        self._cells: tuple[Cell, ...] = tuple(cells)

    @property
    def cells(self) -> tuple[Cell, ...]:
        """Current cells in display (insertion) order."""
        return self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __contains__(self, cell_id: object) -> bool:
        return any(cell.id == cell_id for cell in self._cells)

    def get(self, cell_id: str) -> Cell | None:
        for cell in self._cells:
            if cell.id == cell_id:
                return cell
        return None

    def add_cell(self, cell_type: CellType | str) -> Cell:
        """Append a new empty, never-executed cell and return it."""
        cell = Cell(type=CellType(cell_type))
        self._cells = (*self._cells, cell)
        self._debug("debug", "Cells", f"Added {cell.type.value} cell {cell.id}")
        return cell

    def update_content(self, cell_id: str, content: str) -> None:
        self._replace(cell_id, content=content)

    def delete_cell(self, cell_id: str) -> None:
        remaining = tuple(cell for cell in self._cells if cell.id != cell_id)
        if len(remaining) != len(self._cells):
            self._cells = remaining
            self._debug("debug", "Cells", f"Deleted cell {cell_id}")

    def apply(self, message: ExecutionMessage) -> bool:
        """Apply an execution lifecycle message.

        Returns:
            False if the referenced cell no longer exists, in which case
            nothing changes.
        """
        if isinstance(message, ExecutionStarted):
            return self._replace(message.cell_id, is_executing=True)
        if isinstance(message, ExecutionCompleted):
            return self._replace(
                message.cell_id,
                result=Executed(text=message.output),
                is_executing=False,
            )
        raise TypeError(f"Unsupported execution message: {type(message).__name__}")

    def _replace(self, cell_id: str, **changes: object) -> bool:
        found = False
        updated = []
        for cell in self._cells:
            if cell.id == cell_id:
                cell = cell.model_copy(update=changes)
                found = True
            updated.append(cell)
        if found:
            self._cells = tuple(updated)
        return found
