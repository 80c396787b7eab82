"""Interaction controllers.

Sequence user actions (submit, mic toggle, speak, theme toggle) against the
injected reply service, speech engines and preference store. Controllers
hold no UI references; views subscribe to their callbacks.
"""

from .chat import ChatController
from .models import ListenOutcome, Message, Role, SubmitOutcome
from .speak import SpeakController
from .theme import ThemeController

__all__ = [
    "ChatController",
    "ListenOutcome",
    "Message",
    "Role",
    "SpeakController",
    "SubmitOutcome",
    "ThemeController",
]
