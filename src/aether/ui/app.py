"""Main Textual TUI application.

Orchestrates the UI components over a NotebookController. Every user action
calls one controller operation and then re-syncs the panels from a fresh
snapshot; completions of remote calls are awaited in workers that re-sync
when they settle.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, TextArea

from ..notebook import CellType, NotebookController, View
from .config import AUTOSAVE_INTERVAL_SECONDS, LogLevel
from .screens import ConfirmationScreen
from .styles import APP_CSS
from .themes import AETHER_DARK
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ExperimentsPanel,
    NotebookPanel,
    cell_id_from_editor,
)

VIEW_ORDER = list(View)


class AetherStudioApp(App):
    """Textual TUI for the research notebook."""

    CSS = APP_CSS
    TITLE = "Aether Studio"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "add_cell('code')", "Code Cell"),
        Binding("ctrl+t", "add_cell('markdown')", "Text Cell"),
        Binding("ctrl+r", "run_cell", "Run"),
        Binding("f5", "run_all", "Run All"),
        Binding("ctrl+w", "delete_cell", "Delete"),
        Binding("ctrl+o", "next_view", "View"),
        Binding("ctrl+g", "toggle_assistant", "Assistant"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        controller: NotebookController,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level
        self._run_all_task: asyncio.Task[None] | None = None

    @property
    def controller(self) -> NotebookController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield NotebookPanel(id="notebook")
        with Vertical(id="side-panel"):
            yield ExperimentsPanel(id="experiments")
            yield ChatHistoryWidget(id="chat-history")
            yield ChatInputBar(id="chat-input-bar")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(AETHER_DARK)
        self.theme = "aether-dark"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()

        self._controller.set_debug_callback(self._route_debug)
        self.set_interval(AUTOSAVE_INTERVAL_SECONDS, self._controller.autosave)
        self._sync()

        cells = self._controller.cells.cells
        if cells:
            self.call_after_refresh(self.query_one(NotebookPanel).select, cells[-1].id)

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route component debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.add_entry(component, message, LogLevel.from_string(level))

    def _sync(self) -> None:
        """Bring every panel in line with the controller state."""
        snapshot = self._controller.snapshot()
        self.query_one(NotebookPanel).sync(snapshot.cells)
        self.query_one(ExperimentsPanel).sync(snapshot.experiments)
        self.query_one(ChatHistoryWidget).sync(snapshot.transcript)
        self.sub_title = f"Active Tab: {snapshot.view.value}"

    def _selected_cell_id(self) -> str | None:
        return self.query_one(NotebookPanel).selected_cell_id

    # Event handlers

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        cell_id = cell_id_from_editor(event.text_area.id)
        if cell_id is not None:
            self._controller.update_content(cell_id, event.text_area.text)
        elif event.text_area.id == "chat-input":
            self._controller.assistant.pending_input = event.text_area.text

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        task = self._controller.ask(event.value)
        self._sync()
        if task is not None:
            self._await_completion(task)

    @work(group="remote")
    async def _await_completion(self, task: asyncio.Task[str]) -> None:
        """Re-sync once a remote call started by the controller settles."""
        try:
            await task
        finally:
            self._sync()

    # Actions

    def action_add_cell(self, cell_type: str) -> None:
        cell = self._controller.add_cell(CellType(cell_type))
        self._sync()
        self.call_after_refresh(self.query_one(NotebookPanel).select, cell.id)

    def action_run_cell(self) -> None:
        cell_id = self._selected_cell_id()
        if cell_id is None:
            self.notify("Select a cell first", severity="warning", timeout=2)
            return
        task = self._controller.execute_cell(cell_id)
        self._sync()
        if task is not None:
            self._await_completion(task)

    def action_run_all(self) -> None:
        if self._run_all_task is not None and not self._run_all_task.done():
            self.notify("Run All already in progress", severity="warning", timeout=2)
            return
        self._run_all_task = asyncio.get_running_loop().create_task(self._controller.execute_all())
        self._await_run_all(self._run_all_task)

    @work(group="run-all")
    async def _await_run_all(self, run_all: asyncio.Task[None]) -> None:
        """Re-sync while Run All executes cells in order."""
        while not run_all.done():
            self._sync()
            await asyncio.sleep(0.2)
        self._sync()
        await run_all
        self.notify("All cells executed", timeout=2)

    def action_delete_cell(self) -> None:
        cell_id = self._selected_cell_id()
        cell = self._controller.cells.get(cell_id) if cell_id else None
        if cell is None:
            return

        def _delete(confirmed: bool | None) -> None:
            if confirmed:
                self._controller.delete_cell(cell.id)
                self._sync()

        if cell.content.strip():
            self.push_screen(ConfirmationScreen("Delete this cell?"), _delete)
        else:
            _delete(True)

    def action_next_view(self) -> None:
        index = VIEW_ORDER.index(self._controller.view)
        self._controller.switch_view(VIEW_ORDER[(index + 1) % len(VIEW_ORDER)])
        self._sync()

    def action_toggle_assistant(self) -> None:
        chat = self.query_one(ChatHistoryWidget)
        chat.toggle_class("-hidden")
        if not chat.has_class("-hidden"):
            self.query_one(ChatInputBar).focus_input()

    def action_clear_chat(self) -> None:
        self._controller.assistant.clear()
        self._sync()
        self.notify("Chat cleared", timeout=2)

    def action_toggle_debug(self) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    controller: NotebookController,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Notebook state to drive
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = AetherStudioApp(controller=controller, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
