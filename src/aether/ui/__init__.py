"""Terminal UI module for Aether Studio.

Provides a Textual-based TUI over a NotebookController.

Module structure (each module hides a design decision):
- widgets.py: cell, experiment, chat and log widgets
- styles.py: CSS styling (layout decisions)
- themes.py: color palette
- screens.py: modal confirmation dialog
- config.py: UI constants and log levels
- app.py: application orchestration (user interaction flow)
"""

from .app import AetherStudioApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ExperimentsPanel, NotebookPanel

__all__ = [
    "AetherStudioApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "ExperimentsPanel",
    "LogLevel",
    "NotebookPanel",
    "run_textual_tui",
]
