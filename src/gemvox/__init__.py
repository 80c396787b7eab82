"""
gemvox: a Gemini chat and text-to-speech terminal app.

Each subpackage hides one design decision:
- llm: which generative text backend answers prompts
- speech: which engines recognize and synthesize speech
- preferences: where durable user settings live
- controllers: how user actions are sequenced against those services
- ui: how all of it is presented
"""

__version__ = "0.1.0"

from .controllers import (
    ChatController,
    ListenOutcome,
    Message,
    Role,
    SpeakController,
    SubmitOutcome,
    ThemeController,
)
from .errors import GemvoxError, PreferenceStoreError, ReplyServiceError, SpeechError

__all__ = [
    "ChatController",
    "GemvoxError",
    "ListenOutcome",
    "Message",
    "PreferenceStoreError",
    "ReplyServiceError",
    "Role",
    "SpeakController",
    "SpeechError",
    "SubmitOutcome",
    "ThemeController",
]
