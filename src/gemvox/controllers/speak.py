"""Standalone text-to-speech (the TTS tab)."""

from ..diagnostics import DebugEmitter
from ..speech import SpeechSynthesizer

DEFAULT_LANGUAGE = "en-US"
DEFAULT_PITCH = 1.0


class SpeakController(DebugEmitter):
    """Speaks arbitrary text with a fixed language and pitch.

    Text is forwarded verbatim, empty strings included; the synthesizer
    decides what to do with blank input. Synthesizer errors propagate.
    """

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        language: str = DEFAULT_LANGUAGE,
        pitch: float = DEFAULT_PITCH,
    ) -> None:
        self._synthesizer = synthesizer
        self._language = language
        self._pitch = pitch

    async def speak(self, text: str) -> None:
        await self._synthesizer.set_language(self._language)
        await self._synthesizer.set_pitch(self._pitch)
        self._debug("debug", "Speak", f"Speaking {len(text)} chars")
        await self._synthesizer.speak(text)
