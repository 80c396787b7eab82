"""Terminal UI module for gemvox.

Provides a Textual-based TUI with a Gemini chat tab and a TTS tab.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (chat history, input bar, speak panel, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Light and dark palettes
- config.py: Labels and log levels
- app.py: Application orchestration (user interaction flow)
"""

from .app import GemvoxApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, SpeakPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "GemvoxApp",
    "LogLevel",
    "SpeakPanel",
    "run_textual_tui",
]
