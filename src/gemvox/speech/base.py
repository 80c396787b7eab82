"""Contracts for speech recognition, synthesis and device permissions."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from ..diagnostics import DebugEmitter
from .models import Capability, PermissionStatus

ResultCallback = Callable[[str], None]


class SpeechRecognizer(DebugEmitter, ABC):
    """Converts live microphone audio into text.

    A listening session starts with listen() and ends with stop(). The
    result callback may fire many times per session; every call carries the
    engine's full current guess for the session, not a delta. Callbacks are
    always delivered on the event loop that called initialize().
    """

    @abstractmethod
    async def initialize(self) -> bool:
        """Prepare the engine before a session. Returns False if recognition is unavailable."""

    @abstractmethod
    def listen(self, on_result: ResultCallback) -> None:
        """Start capturing and report results to on_result."""

    @abstractmethod
    def stop(self) -> None:
        """Stop capturing immediately."""


class SpeechSynthesizer(DebugEmitter, ABC):
    """Converts text into spoken audio."""

    @abstractmethod
    async def set_language(self, tag: str) -> None:
        """Select the spoken language by BCP 47 tag, e.g. 'en-US'."""

    @abstractmethod
    async def set_pitch(self, value: float) -> None:
        """Set the voice pitch; 1.0 is the engine's normal pitch."""

    @abstractmethod
    async def speak(self, text: str) -> None:
        """Speak text and return once playback has finished."""

    async def close(self) -> None:
        """Release the engine."""


class PermissionAuthority(ABC):
    """Grants or refuses access to device capabilities."""

    @abstractmethod
    async def status(self, capability: Capability) -> PermissionStatus:
        """Return the current status without prompting."""

    @abstractmethod
    async def request(self, capability: Capability) -> PermissionStatus:
        """Ask for the capability. Requesting an already granted capability is a no-op."""
