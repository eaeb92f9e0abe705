"""Percent-format scripts as notebook cells.

A script is split at lines starting with ``# %%``. A marker line containing
``[markdown]`` starts a markdown cell whose lines drop their leading ``# ``.
Text before the first marker becomes a code cell if it is not blank.

    # %% [markdown]
    # # Training
    # %%
    model.train()
"""

import re

from .models import Cell, CellType

CELL_MARKER = re.compile(r"^#\s*%%(?P<rest>.*)$")


def _uncomment(line: str) -> str:
    if line.startswith("# "):
        return line[2:]
    if line.startswith("#"):
        return line[1:]
    return line


def _make_cell(cell_type: CellType, lines: list[str]) -> Cell | None:
    if cell_type is CellType.MARKDOWN:
        lines = [_uncomment(line) for line in lines]
    content = "\n".join(lines).strip("\n")
    if not content.strip():
        return None
    return Cell(type=cell_type, content=content)


def parse_script(text: str) -> list[Cell]:
    """Split a percent-format script into cells, skipping blank ones."""
    cells: list[Cell] = []
    cell_type = CellType.CODE
    lines: list[str] = []

    for line in text.splitlines():
        match = CELL_MARKER.match(line)
        if match is None:
            lines.append(line)
            continue

        cell = _make_cell(cell_type, lines)
        if cell is not None:
            cells.append(cell)
        cell_type = CellType.MARKDOWN if "[markdown]" in match.group("rest") else CellType.CODE
        lines = []

    cell = _make_cell(cell_type, lines)
    if cell is not None:
        cells.append(cell)
    return cells
