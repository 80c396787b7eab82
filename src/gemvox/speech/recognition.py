"""Speech-to-text backend powered by ``speech_recognition``.

Captures the microphone on the library's background listener thread and
recognizes each phrase with the Google Web Speech API. Results are handed
back to the asyncio loop with call_soon_threadsafe so callers never touch
their state from the listener thread.
"""

import asyncio
from typing import Any

from .base import ResultCallback, SpeechRecognizer


class SpeechRecognitionListener(SpeechRecognizer):
    """Continuous microphone transcription via speech_recognition.

    Phrases recognized during one listening session are joined, so every
    result reports the whole session's text so far. A phrase that finishes
    recognizing after its session was stopped is dropped.

    stop() returns at once; the next initialize() waits for the stopped
    listener thread to let go of the microphone before listening resumes.
    """

    def __init__(
        self,
        language: str = "en-US",
        phrase_time_limit: float | None = 5.0,
        adjust_noise_seconds: float = 0.2,
        device_index: int | None = None,
    ) -> None:
        try:
            import speech_recognition as sr
        except ImportError as exc:
            raise ImportError(
                "Speech recognition backend requires SpeechRecognition and PyAudio. "
                "Install with: pip install SpeechRecognition pyaudio"
            ) from exc

        self._sr = sr
        self._recognizer = sr.Recognizer()
        self._language = language
        self._phrase_time_limit = phrase_time_limit
        self._adjust_noise_seconds = max(0.0, adjust_noise_seconds)
        self._device_index = device_index
        self._microphone: Any | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stopper: Any | None = None
        # Stopped listener threads that may still hold the microphone
        self._retired: list[Any] = []
        self._session = 0

    @property
    def language(self) -> str:
        return self._language

    async def initialize(self) -> bool:
        """Open the microphone and calibrate for ambient noise.

        Also waits for listener threads from earlier sessions to release
        the microphone. Returns False if PyAudio or an input device is
        missing.
        """
        self._loop = asyncio.get_running_loop()
        await self._join_retired()
        if self._microphone is not None:
            return True

        try:
            self._microphone = await asyncio.to_thread(self._open_microphone)
        except (OSError, AttributeError, self._sr.WaitTimeoutError) as e:
            # AttributeError is how speech_recognition reports a missing PyAudio
            self._debug("error", "STT", f"Microphone unavailable: {e}")
            self._microphone = None
            return False

        self._debug("info", "STT", f"Microphone ready (language={self._language})")
        return True

    async def _join_retired(self) -> None:
        while self._retired:
            stopper = self._retired.pop()
            # Returns once the thread has finished any in-flight recognition
            await asyncio.to_thread(stopper, True)

    def _open_microphone(self) -> Any:
        microphone = self._sr.Microphone(device_index=self._device_index)
        if self._adjust_noise_seconds > 0:
            with microphone as source:
                self._recognizer.adjust_for_ambient_noise(source, duration=self._adjust_noise_seconds)
        return microphone

    def listen(self, on_result: ResultCallback) -> None:
        if self._microphone is None or self._loop is None:
            raise RuntimeError("listen() called before a successful initialize()")
        if self._retired:
            raise RuntimeError("initialize() must run after stop() before listening again")
        if self._stopper is not None:
            return

        self._session += 1
        session = self._session
        phrases: list[str] = []

        def _on_audio(recognizer: Any, audio: Any) -> None:
            # Runs on the speech_recognition listener thread
            text = self._recognize(recognizer, audio)
            if not text:
                return
            phrases.append(text)
            self._loop.call_soon_threadsafe(self._deliver, session, on_result, " ".join(phrases))

        self._stopper = self._recognizer.listen_in_background(
            self._microphone,
            _on_audio,
            phrase_time_limit=self._phrase_time_limit,
        )
        self._debug("debug", "STT", f"Background listener started (session {session})")

    def _deliver(self, session: int, on_result: ResultCallback, text: str) -> None:
        if session != self._session or self._stopper is None:
            self._debug("debug", "STT", f"Dropped result from stopped session {session}")
            return
        on_result(text)

    def _recognize(self, recognizer: Any, audio: Any) -> str:
        try:
            return recognizer.recognize_google(audio, language=self._language).strip()
        except self._sr.UnknownValueError:
            return ""
        except self._sr.RequestError as e:
            self._loop.call_soon_threadsafe(
                self._debug, "error", "STT", f"Recognition request failed: {e}"
            )
            return ""

    def stop(self) -> None:
        if self._stopper is None:
            return
        stopper, self._stopper = self._stopper, None
        self._session += 1
        stopper(wait_for_stop=False)
        self._retired.append(stopper)
        self._debug("debug", "STT", "Background listener stopped")
