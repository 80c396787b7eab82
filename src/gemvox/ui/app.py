"""Main Textual TUI application.

Wires the controllers into a two-tab layout (Gemini chat, TTS) and applies
the persisted light/dark theme.
"""

import asyncio
import threading
from collections.abc import Iterable
from typing import Any

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, TabbedContent, TabPane

from ..controllers import ChatController, ListenOutcome, Message, SpeakController, ThemeController
from ..diagnostics import DebugEmitter
from .config import APP_TITLE, CHAT_TAB_TITLE, TTS_TAB_TITLE, LogLevel
from .styles import APP_CSS
from .themes import GEMVOX_DARK, GEMVOX_LIGHT, theme_name
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, SpeakPanel


class GemvoxApp(App):
    """Textual TUI for Gemini chat and text-to-speech."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("ctrl+l", "toggle_listening", "Mic"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("f2", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        chat: ChatController,
        speaker: SpeakController,
        theme: ThemeController,
        model_name: str = "unknown",
        log_level: str | None = None,
        debug_sources: Iterable[DebugEmitter] = (),
    ) -> None:
        super().__init__()
        self._chat = chat
        self._speaker = speaker
        self._theme_controller = theme
        self._model_name = model_name
        self._log_level = log_level
        self._debug_sources = [chat, speaker, theme, *debug_sources]
        self._unsubscribe_theme: Any | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with TabbedContent(id="tabs"):
            with TabPane(CHAT_TAB_TITLE, id="chat-tab"):
                yield ChatHistoryWidget(id="chat-history")
                yield ChatInputBar(id="chat-input-bar")
            with TabPane(TTS_TAB_TITLE, id="tts-tab"):
                yield SpeakPanel(id="speak-panel")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(GEMVOX_DARK)
        self.register_theme(GEMVOX_LIGHT)
        self._apply_theme(self._theme_controller.current_value())
        self._unsubscribe_theme = self._theme_controller.subscribe(self._apply_theme)

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        for source in self._debug_sources:
            source.set_debug_callback(self._route_debug)

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        self._chat.set_callbacks(
            on_message=self._show_message,
            on_pending_input=input_bar.set_value,
            on_listening=input_bar.set_listening,
        )
        for message in self._chat.transcript:
            self._show_message(message)

        self.sub_title = self._model_name
        input_bar.focus_input()

    def on_unmount(self) -> None:
        if self._unsubscribe_theme is not None:
            self._unsubscribe_theme()
            self._unsubscribe_theme = None
        self._chat.set_callbacks()
        for source in self._debug_sources:
            source.set_debug_callback(None)

    def _apply_theme(self, is_dark_mode: bool) -> None:
        self.theme = theme_name(is_dark_mode)

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route component debug messages to the log panel."""
        if self._thread_id != threading.get_ident():
            self.call_from_thread(self._route_debug, level, component, message)
            return
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.add_entry(component, message, LogLevel.from_string(level))

    def _show_message(self, message: Message) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).add_message(message)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        self._submit(event.value)

    def on_chat_input_bar_edited(self, event: ChatInputBar.Edited) -> None:
        self._chat.set_pending_input(event.value)

    def on_chat_input_bar_mic_pressed(self, event: ChatInputBar.MicPressed) -> None:
        self.action_toggle_listening()

    def on_speak_panel_speak_requested(self, event: SpeakPanel.SpeakRequested) -> None:
        self._speak(event.text)

    @work(group="chat")
    async def _submit(self, text: str) -> None:
        """Run one chat turn. Turns queue inside the controller."""
        await self._chat.submit(text)

    @work(group="speak")
    async def _speak(self, text: str) -> None:
        try:
            await self._speaker.speak(text)
        except Exception as e:
            self.query_one("#debug-panel", DebugPanel).error("Speak", str(e))
            self.notify(f"Speech failed: {str(e)[:50]}", severity="error", timeout=5)

    @work(group="mic")
    async def action_toggle_listening(self) -> None:
        """Start or stop speech input for the chat tab."""
        outcome = await self._chat.toggle_listening()
        if outcome is ListenOutcome.PERMISSION_DENIED:
            self.notify(
                "Microphone access is not available. Check that a microphone is connected.",
                severity="warning",
                timeout=4,
            )

    def action_toggle_theme(self) -> None:
        is_dark_mode = self._theme_controller.toggle()
        self.notify(f"{'Dark' if is_dark_mode else 'Light'} mode", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    chat: ChatController,
    speaker: SpeakController,
    theme: ThemeController,
    model_name: str = "unknown",
    log_level: str | None = None,
    debug_sources: Iterable[DebugEmitter] = (),
) -> None:
    """Run the Textual TUI.

    Args:
        chat: Chat controller for the first tab
        speaker: Standalone speak controller for the second tab
        theme: Theme controller; its pending writes are flushed on exit
        model_name: Shown as the header subtitle
        log_level: Log level for panel (debug/info/warning/error), None to hide
        debug_sources: Adapters whose debug output should reach the log panel
    """
    app = GemvoxApp(
        chat=chat,
        speaker=speaker,
        theme=theme,
        model_name=model_name,
        log_level=log_level,
        debug_sources=debug_sources,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        if chat.listening:
            await chat.toggle_listening()
        await theme.flush()
