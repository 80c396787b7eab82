"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    background: $background;
}

TabbedContent {
    height: 1fr;
}

TabPane {
    padding: 0 1;
}

/* Chat tab */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $primary;
    background: $primary 15%;
    margin-left: 8;
}

.assistant-message {
    border-left: thick $secondary;
    background: $surface;
    margin-right: 8;
}

.error-message {
    border-left: thick $error;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

.message-content {
    height: auto;
    margin: 0;
}

ChatInputBar {
    height: auto;
    padding: 1 0 0 0;
}

#chat-input {
    width: 1fr;
}

#mic-btn, #send-btn {
    min-width: 8;
    margin: 0 0 0 1;
}

#mic-btn {
    margin: 0 1 0 0;
}

#mic-btn.-listening {
    background: $error;
    color: $background;
    text-style: bold;
}

/* TTS tab */
SpeakPanel {
    height: auto;
    padding: 1 0;
}

#tts-input {
    margin-bottom: 1;
}

/* Log panel */
#debug-panel {
    height: 12;
    border: round $border;
    border-title-color: $accent;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}
"""
