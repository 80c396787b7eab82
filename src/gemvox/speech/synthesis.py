"""Text-to-speech backend powered by ``pyttsx3``.

pyttsx3 drives the platform engine (SAPI5, NSSpeechSynthesizer, eSpeak)
synchronously, and SAPI5 and NSSpeechSynthesizer only work on the thread
that created them. The engine is therefore created and driven on one
dedicated worker thread, and every call is serialized with a lock.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any

from ..errors import SpeechError
from .base import SpeechSynthesizer

# eSpeak pitch runs 0-100 with 50 as normal
_ENGINE_PITCH_NORMAL = 50
_ENGINE_PITCH_MAX = 100


def _normalize_language(tag: Any) -> str:
    """Normalize a language tag as reported by pyttsx3 voices.

    eSpeak reports languages as bytes prefixed with a priority byte
    (e.g. b'\\x05en-us'); SAPI and NSS report strings like 'en_US'.
    """
    if isinstance(tag, bytes):
        tag = tag.decode("utf-8", errors="ignore")
    tag = "".join(ch for ch in str(tag) if ch.isprintable())
    return tag.strip().replace("_", "-").lower()


class Pyttsx3Synthesizer(SpeechSynthesizer):
    """Speaker playback using a local pyttsx3 engine instance.

    Any engine failure, whatever the driver raises, is reported as
    SpeechError.
    """

    def __init__(
        self,
        *,
        voice_id: str | None = None,
        rate: int | None = None,
        volume: float | None = None,
    ) -> None:
        try:
            import pyttsx3
        except ImportError as exc:
            raise ImportError(
                "Text-to-speech backend requires pyttsx3. "
                "Install with: pip install pyttsx3"
            ) from exc

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gemvox-tts")
        try:
            self._engine = self._executor.submit(
                self._create_engine, pyttsx3, voice_id, rate, volume
            ).result()
        except BaseException:
            self._executor.shutdown(wait=False)
            raise
        self._lock = asyncio.Lock()

    @staticmethod
    def _create_engine(pyttsx3: Any, voice_id: str | None, rate: int | None, volume: float | None) -> Any:
        engine = pyttsx3.init()
        if voice_id:
            engine.setProperty("voice", voice_id)
        if rate is not None:
            engine.setProperty("rate", rate)
        if volume is not None:
            engine.setProperty("volume", max(0.0, min(1.0, volume)))
        return engine

    async def _run(self, func: Any, *args: Any) -> Any:
        """Run an engine call on the engine's own thread."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(func, *args))

    async def set_language(self, tag: str) -> None:
        async with self._lock:
            try:
                voice_id = await self._run(self._find_voice, tag)
                if voice_id is not None:
                    await self._run(self._engine.setProperty, "voice", voice_id)
            except Exception as e:
                raise SpeechError(f"Cannot select a voice for '{tag}': {e}") from e
        if voice_id is None:
            self._debug("warning", "TTS", f"No installed voice for language '{tag}', keeping current voice")
        else:
            self._debug("debug", "TTS", f"Voice set to {voice_id} for '{tag}'")

    def _find_voice(self, tag: str) -> str | None:
        wanted = _normalize_language(tag)
        primary = wanted.split("-")[0]
        fallback = None
        for voice in self._engine.getProperty("voices") or []:
            languages = [_normalize_language(lang) for lang in (getattr(voice, "languages", None) or [])]
            if wanted in languages:
                return voice.id
            if fallback is None and any(lang.split("-")[0] == primary for lang in languages):
                fallback = voice.id
        return fallback

    async def set_pitch(self, value: float) -> None:
        engine_pitch = int(round(max(0.0, value) * _ENGINE_PITCH_NORMAL))
        engine_pitch = min(_ENGINE_PITCH_MAX, engine_pitch)
        async with self._lock:
            try:
                await self._run(self._engine.setProperty, "pitch", engine_pitch)
            except KeyError:
                # Only the eSpeak driver exposes pitch
                self._debug("warning", "TTS", "Speech driver does not support pitch")
            except Exception as e:
                raise SpeechError(f"Cannot set pitch: {e}") from e

    async def speak(self, text: str) -> None:
        if not text.strip():
            return
        async with self._lock:
            try:
                await self._run(self._say, text)
            except Exception as e:
                raise SpeechError(f"Speech playback failed: {e}") from e

    def _say(self, text: str) -> None:
        self._engine.say(text)
        self._engine.runAndWait()

    async def close(self) -> None:
        async with self._lock:
            try:
                await self._run(self._engine.stop)
            except Exception as e:
                raise SpeechError(f"Cannot stop speech engine: {e}") from e
            finally:
                self._executor.shutdown(wait=False)
