"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.

Layout: notebook on the left, experiments and assistant stacked on the
right, the trace log along the bottom when shown.
"""

APP_CSS = """
Screen {
    layout: grid;
    grid-size: 2 2;
    grid-columns: 3fr 2fr;
    grid-rows: 1fr auto;
    background: $background;
}

#notebook {
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.cell {
    height: auto;
    margin: 1 0 0 0;
    border: tall $border;
    background: $surface;

    &:focus-within {
        border: tall $primary;
    }

    &.executing {
        border: tall $accent;
    }
}

.cell-header {
    height: 1;
    color: $text-muted;
    padding: 0 1;
}

.cell-editor {
    height: auto;
    min-height: 3;
    max-height: 20;
    border: none;
    background: $surface;
}

.cell.markdown .cell-editor {
    color: $secondary;
}

.cell-output {
    height: auto;
    padding: 0 1;
    color: $foreground 80%;
    background: $panel;
    border-top: dashed $border;
}

#side-panel {
    height: 100%;
}

#experiments {
    height: 1fr;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    background: $panel;
}

#chat-history {
    height: 2fr;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    background: $panel;
    padding: 0 1;

    &.-hidden {
        display: none;
    }
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $primary;
}

.assistant-message {
    border-left: thick $secondary;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

.message-content {
    height: auto;
}

#chat-input-bar {
    height: 5;
    column-span: 1;

    TextArea {
        width: 1fr;
        border: tall $border;
    }

    Button {
        width: 10;
        height: 100%;
    }
}

#debug-panel {
    column-span: 2;
    height: 10;
    border: round $warning 60%;
    border-title-color: $warning;
    background: $panel;
}
"""
