"""Speech module boundaries.

Hides which engines turn microphone audio into text, text into audio, and
how the microphone capability is granted.
"""

from .base import PermissionAuthority, SpeechRecognizer, SpeechSynthesizer
from .factory import create_permission_authority, create_speech_recognizer, create_speech_synthesizer
from .models import Capability, PermissionStatus

__all__ = [
    "Capability",
    "PermissionAuthority",
    "PermissionStatus",
    "SpeechRecognizer",
    "SpeechSynthesizer",
    "create_permission_authority",
    "create_speech_recognizer",
    "create_speech_synthesizer",
]
