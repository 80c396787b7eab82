"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering
- Chat input bar (mic, text field, send)
- Standalone speak panel
- Log rendering and level filtering
"""

from datetime import datetime

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..controllers import Message, Role
from .config import (
    CHAT_INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MIC_LABEL_IDLE,
    MIC_LABEL_LISTENING,
    TTS_INPUT_PLACEHOLDER,
    LogLevel,
)


class ClickableMessage(Vertical):
    """A chat message container that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable view of the chat transcript."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def add_message(self, message: Message) -> None:
        """Render a transcript entry at the bottom of the history."""
        self._messages.append(message)
        self._render_message(message)
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._messages):
            if msg.role is Role.ASSISTANT:
                return msg.text
        return None

    def _render_message(self, msg: Message) -> None:
        timestamp = msg.timestamp.strftime("%H:%M:%S")
        if msg.role is Role.USER:
            header_text = f"> You [{timestamp}]"
            classes = "chat-message user-message"
        else:
            header_text = f"< Gemini [{timestamp}]"
            classes = "chat-message assistant-message"
            if msg.is_error:
                classes += " error-message"

        container = ClickableMessage(content=msg.text, classes=classes)
        container.compose_add_child(Static(header_text, classes="message-header", markup=False))

        if msg.role is Role.ASSISTANT:
            container.compose_add_child(Markdown(msg.text, classes="message-content"))
        else:
            container.compose_add_child(Static(msg.text, classes="message-content", markup=False))

        self.mount(container)


class ChatInputBar(Horizontal):
    """Mic toggle, single-line prompt field and Send button."""

    class Submitted(TextualMessage):
        """Posted when the user submits the prompt field."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class MicPressed(TextualMessage):
        """Posted when the user presses the mic toggle."""

    class Edited(TextualMessage):
        """Posted when the user edits the prompt field."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield Button(MIC_LABEL_IDLE, id="mic-btn").with_tooltip("Start/stop speech input")
        yield Input(placeholder=CHAT_INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="success").with_tooltip("Send (Enter)")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.post_message(self.Submitted(self.value))
        elif event.button.id == "mic-btn":
            event.stop()
            self.post_message(self.MicPressed())

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.Edited(event.value))

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", Input).value

    def set_value(self, text: str) -> None:
        """Replace the prompt field's text, e.g. with live recognition results."""
        field = self.query_one("#chat-input", Input)
        if field.value != text:
            field.value = text
            field.cursor_position = len(text)

    def set_listening(self, listening: bool) -> None:
        """Reflect the listening state on the mic button."""
        button = self.query_one("#mic-btn", Button)
        button.label = MIC_LABEL_LISTENING if listening else MIC_LABEL_IDLE
        button.set_class(listening, "-listening")

    def focus_input(self) -> None:
        self.query_one("#chat-input", Input).focus()


class SpeakPanel(Vertical):
    """Free-text field with a Speak button."""

    class SpeakRequested(TextualMessage):
        """Posted when the user presses Speak."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    def compose(self):
        yield Input(placeholder=TTS_INPUT_PLACEHOLDER, id="tts-input")
        yield Button("Speak", id="speak-btn", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "speak-btn":
            event.stop()
            text = self.query_one("#tts-input", Input).value
            self.post_message(self.SpeakRequested(text))


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Hidden by default, shown with --log-level flag or toggled with F2.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    _LEVEL_COLORS = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    _COMPONENT_COLORS = {
        "TUI": "cyan",
        "Chat": "green",
        "Theme": "bright_blue",
        "Speak": "bright_cyan",
        "LLM": "magenta",
        "STT": "yellow",
        "TTS": "bright_yellow",
        "Prefs": "bright_green",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
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

        from rich.markup import escape

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self._LEVEL_COLORS.get(level, "white")
        comp_color = self._COMPONENT_COLORS.get(component, "white")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<7}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def debug(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
