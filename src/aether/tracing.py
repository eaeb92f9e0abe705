"""Debug callback plumbing shared by the notebook components.

Components never print or log directly. They report through an optional
callback so the front-end decides where messages go (TUI log panel, Rich
console, or nowhere).
"""

from collections.abc import Callable

# callback(level, component, message), level in debug/info/warning/error
DebugCallback = Callable[[str, str, str], None]


class Traceable:
    """Mixin giving a component a settable debug callback."""

    _debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)
