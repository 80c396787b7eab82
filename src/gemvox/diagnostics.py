"""Debug callback plumbing.

Components never print or raise for best-effort side channels. They report
through a callback with the signature ``(level, component, message)`` where
level is one of 'debug', 'info', 'warning', 'error'. The TUI routes it to
its log panel; the CLI routes it to the console.
"""

from collections.abc import Callable

DebugCallback = Callable[[str, str, str], None]


class DebugEmitter:
    """Mixin giving a component an optional debug callback."""

    _debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for detailed logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send a debug log message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)
