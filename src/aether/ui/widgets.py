"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- How cells are rendered and kept in step with the controller
- Experiment table formatting
- Chat message rendering and input history
- Log level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import DescendantFocus
from textual.message import Message
from textual.widgets import Button, DataTable, Markdown, RichLog, Static, TextArea

from ..notebook import AssistantMessage, Cell, CellType, Experiment, Role
from .config import (
    CELL_ID_PREVIEW_LENGTH,
    EXPERIMENT_TIMESTAMP_FORMAT,
    INPUT_HISTORY_MAX_SIZE,
    LOG_TIMESTAMP_FORMAT,
    MAX_OUTPUT_LENGTH,
    LogLevel,
)

EDITOR_ID_PREFIX = "editor-"


def editor_id(cell_id: str) -> str:
    return f"{EDITOR_ID_PREFIX}{cell_id}"


def cell_id_from_editor(widget_id: str | None) -> str | None:
    """Cell id encoded in an editor widget id, or None for other widgets."""
    if widget_id and widget_id.startswith(EDITOR_ID_PREFIX):
        return widget_id[len(EDITOR_ID_PREFIX):]
    return None


class CellWidget(Vertical):
    """One notebook cell: header line, editable source, output area.

    The editor is the source of truth for content while the user types, so
    sync() never rewrites it.
    """

    def __init__(self, cell: Cell, *args, **kwargs) -> None:
        super().__init__(*args, id=f"cell-{cell.id}", classes=f"cell {cell.type.value}", **kwargs)
        self.cell_id = cell.id
        self._cell = cell

    def compose(self):
        yield Static(self._header_text(self._cell), classes="cell-header")
        editor = TextArea(self._cell.content, id=editor_id(self._cell.id), classes="cell-editor")
        editor.show_line_numbers = self._cell.type is CellType.CODE
        yield editor
        output = Static("", classes="cell-output")
        output.display = False
        yield output

    def on_mount(self) -> None:
        self.sync(self._cell)

    def _header_text(self, cell: Cell) -> str:
        short_id = cell.id[:CELL_ID_PREVIEW_LENGTH]
        marker = "[b green]running...[/]" if cell.is_executing else ""
        return f"[b]{cell.type.value}[/] [dim]{short_id}[/] {marker}"

    def sync(self, cell: Cell) -> None:
        """Update header and output from the latest cell state."""
        self._cell = cell
        self.query_one(".cell-header", Static).update(self._header_text(cell))
        self.set_class(cell.is_executing, "executing")

        output = self.query_one(".cell-output", Static)
        text = cell.output
        if text:
            if len(text) > MAX_OUTPUT_LENGTH:
                text = text[:MAX_OUTPUT_LENGTH] + "\n... (output truncated)"
            output.update(Text(text))
            output.display = True
        else:
            output.display = False

    def focus_editor(self) -> None:
        self.query_one(TextArea).focus()


class NotebookPanel(VerticalScroll):
    """Scrollable list of cells in display order."""

    BORDER_TITLE = "Notebook"
    BORDER_SUBTITLE = "No cells"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._widgets: dict[str, CellWidget] = {}
        self.selected_cell_id: str | None = None

    def sync(self, cells: tuple[Cell, ...]) -> None:
        """Mount, update and remove cell widgets to match the cells."""
        live_ids = {cell.id for cell in cells}
        for cell_id in list(self._widgets):
            if cell_id not in live_ids:
                self._widgets.pop(cell_id).remove()
                if self.selected_cell_id == cell_id:
                    self.selected_cell_id = None

        for cell in cells:
            widget = self._widgets.get(cell.id)
            if widget is None:
                widget = CellWidget(cell)
                self._widgets[cell.id] = widget
                self.mount(widget)
            elif widget.is_mounted:
                widget.sync(cell)

        running = sum(1 for cell in cells if cell.is_executing)
        subtitle = f"{len(cells)} cells" if cells else "No cells"
        if running:
            subtitle += f", {running} running"
        self.border_subtitle = subtitle

    def select(self, cell_id: str) -> None:
        widget = self._widgets.get(cell_id)
        if widget is not None:
            self.selected_cell_id = cell_id
            widget.focus_editor()
            self.scroll_to_widget(widget)

    def on_descendant_focus(self, event: DescendantFocus) -> None:
        cell_id = cell_id_from_editor(event.widget.id)
        if cell_id is not None:
            self.selected_cell_id = cell_id


class ExperimentsPanel(DataTable):
    """Tracked experiments, most recent first."""

    BORDER_TITLE = "Experiments"

    COLUMN_LABELS = ("Name", "Status", "Acc", "Loss", "Epoch", "Started")

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if not self.columns:
            self.add_columns(*self.COLUMN_LABELS)

    def sync(self, experiments: tuple[Experiment, ...]) -> None:
        self._ensure_columns()
        self.clear()
        status_styles = {"running": "green", "completed": "cyan", "failed": "red"}
        for experiment in experiments:
            style = status_styles.get(experiment.status.value, "white")
            self.add_row(
                experiment.name,
                Text(experiment.status.value, style=style),
                f"{experiment.metrics.accuracy:.2f}",
                f"{experiment.metrics.loss:.2f}",
                str(experiment.metrics.epoch),
                experiment.timestamp.strftime(EXPERIMENT_TIMESTAMP_FORMAT),
                key=experiment.id,
            )
        self.border_subtitle = f"{len(experiments)} runs"


class ChatHistoryWidget(VerticalScroll):
    """Scrollable assistant transcript."""

    BORDER_TITLE = "Assistant"
    BORDER_SUBTITLE = "Ask anything"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered = 0

    def sync(self, transcript: tuple[AssistantMessage, ...]) -> None:
        """Render messages not shown yet; re-render if the transcript was cleared."""
        if len(transcript) < self._rendered:
            self.remove_children()
            self._rendered = 0

        for message in transcript[self._rendered:]:
            self._render_message(message)
        if len(transcript) != self._rendered:
            self._rendered = len(transcript)
            self.scroll_end(animate=False)

        self.border_subtitle = f"{len(transcript)} messages" if transcript else "Ask anything"

    def _render_message(self, message: AssistantMessage) -> None:
        if message.role is Role.USER:
            prefix, css_class, icon = "You", "user-message", ">"
        else:
            prefix, css_class, icon = "Aether", "assistant-message", "<"

        timestamp = message.timestamp.strftime(LOG_TIMESTAMP_FORMAT)
        container = Vertical(classes=f"chat-message {css_class}")
        container.compose_add_child(Static(f"{icon} {prefix} [{timestamp}]", classes="message-header", markup=False))
        if message.role is Role.AI:
            container.compose_add_child(Markdown(message.text, classes="message-content"))
        else:
            container.compose_add_child(Static(Text(message.text), classes="message-content"))
        self.mount(container)


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Ask", id="send-btn", variant="primary").with_tooltip(
            "Ask the assistant (Ctrl+J)"
        )

    def on_mount(self) -> None:
        self.query_one("#chat-input", TextArea).highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()

    def _cursor_at_start(self) -> bool:
        return self.query_one("#chat-input", TextArea).cursor_location == (0, 0)

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        if self._history_index == -1:
            self._history_index = len(self._history) - 1
        else:
            self._history_index = max(0, min(len(self._history) - 1, self._history_index + direction))
        self.query_one("#chat-input", TextArea).text = self._history[self._history_index]

    def _submit(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text
        if value.strip():
            if not self._history or self._history[-1] != value:
                self._history.append(value)
                del self._history[:-INPUT_HISTORY_MAX_SIZE]
            self._history_index = -1
            text_area.text = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    COMPONENT_COLORS = {
        "CORE": "green",
        "Cells": "bright_blue",
        "Dispatch": "yellow",
        "Experiments": "bright_green",
        "Assistant": "bright_magenta",
        "LLM": "magenta",
    }

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def add_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        line = Text.assemble(
            (timestamp, "dim"),
            " ",
            (f"{LogLevel.name(level):<5}", level_color),
            " ",
            (f"[{component}]", comp_color),
            f" {message}",
        )
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
