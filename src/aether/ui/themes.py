"""Theme definitions for the TUI.

Hides the color palette. The studio uses a neutral zinc palette with an
indigo accent, registered under the name ``aether-dark``.
"""

from textual.theme import Theme

AETHER_DARK = Theme(
    name="aether-dark",
    primary="#818cf8",      # Indigo 400 - main accent
    secondary="#a78bfa",    # Violet 400
    accent="#34d399",       # Emerald 400 - running state
    foreground="#e4e4e7",   # Zinc 200
    background="#09090b",   # Zinc 950
    success="#34d399",
    warning="#fbbf24",
    error="#f87171",
    surface="#18181b",      # Zinc 900
    panel="#111113",
    dark=True,
    variables={
        "border": "#3f3f46",
        "border-blurred": "#27272a",
        "scrollbar": "#27272a",
        "scrollbar-hover": "#3f3f46",
        "scrollbar-active": "#818cf8",
        "scrollbar-background": "#09090b",
        "footer-key-foreground": "#818cf8",
        "footer-background": "#09090b",
        "text-muted": "#71717a",
        "input-selection-background": "#818cf8 30%",
    },
)
