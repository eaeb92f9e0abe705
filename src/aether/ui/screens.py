"""Modal screens for the TUI.

Hides how confirmations are presented. Only destructive actions on cells
with content ask first.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmationScreen(ModalScreen[bool]):
    """Yes/No dialog. Dismisses with True when confirmed."""

    CSS = """
    ConfirmationScreen {
        align: center middle;
        background: $background 70%;
    }

    #confirmation-dialog {
        width: 60;
        height: auto;
        border: tall $warning;
        background: $surface;
        padding: 1 2;
    }

    #confirmation-prompt {
        width: 100%;
        text-align: center;
        padding: 1 2;
    }

    #confirmation-buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }

    #confirmation-buttons Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Yes", show=False),
        Binding("n", "cancel", "No", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self._prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="confirmation-dialog"):
            yield Static(self._prompt, id="confirmation-prompt")
            with Horizontal(id="confirmation-buttons"):
                yield Button("Yes", id="btn-yes", variant="error")
                yield Button("No", id="btn-no", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
