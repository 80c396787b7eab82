"""Chat-and-speech interaction controller (the chat tab)."""

import asyncio
from collections.abc import Callable

from ..diagnostics import DebugEmitter
from ..llm import LLMProvider
from ..speech import Capability, PermissionAuthority, SpeechRecognizer, SpeechSynthesizer
from .models import ListenOutcome, Message, Role, SubmitOutcome

NO_REPLY_TEXT = "No response from Gemini"


def _truncate(text: str, limit: int = 60) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class ChatController(DebugEmitter):
    """Owns the transcript, the listening flag and the pending input.

    submit() appends the user's message, asks the reply service, appends the
    reply (or an "Error: ..." entry) and speaks successful replies. Only the
    latest input is sent; earlier turns are never replayed as context.
    Submissions run one at a time in the order they were made.
    Passing synthesizer=None mutes playback.

    toggle_listening() starts or stops the recognizer. While listening,
    every recognition result replaces the pending input.
    """

    def __init__(
        self,
        reply_service: LLMProvider,
        synthesizer: SpeechSynthesizer | None,
        recognizer: SpeechRecognizer,
        permissions: PermissionAuthority,
        empty_reply_text: str = NO_REPLY_TEXT,
    ) -> None:
        self._reply_service = reply_service
        self._synthesizer = synthesizer
        self._recognizer = recognizer
        self._permissions = permissions
        self._empty_reply_text = empty_reply_text

        self._transcript: list[Message] = []
        self._listening = False
        self._pending_input = ""

        self._submit_lock = asyncio.Lock()
        self._toggle_lock = asyncio.Lock()

        self._on_message: Callable[[Message], None] | None = None
        self._on_pending_input: Callable[[str], None] | None = None
        self._on_listening: Callable[[bool], None] | None = None

    def set_callbacks(
        self,
        on_message: Callable[[Message], None] | None = None,
        on_pending_input: Callable[[str], None] | None = None,
        on_listening: Callable[[bool], None] | None = None,
    ) -> None:
        """Set view callbacks for state changes."""
        self._on_message = on_message
        self._on_pending_input = on_pending_input
        self._on_listening = on_listening

    @property
    def transcript(self) -> tuple[Message, ...]:
        return tuple(self._transcript)

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def pending_input(self) -> str:
        return self._pending_input

    @property
    def busy(self) -> bool:
        """True while a submission is waiting for its reply."""
        return self._submit_lock.locked()

    def set_pending_input(self, text: str) -> None:
        if text == self._pending_input:
            return
        self._pending_input = text
        if self._on_pending_input:
            self._on_pending_input(text)

    async def submit(self, text: str) -> SubmitOutcome:
        if not text.strip():
            return SubmitOutcome.IGNORED

        async with self._submit_lock:
            self._append(Message(role=Role.USER, text=text))
            self._debug("info", "Chat", f"Prompt: '{_truncate(text)}'")

            try:
                response = await self._reply_service.generate(text)
            except Exception as e:
                self._debug("error", "Chat", f"Reply failed: {e}")
                self._append(Message(role=Role.ASSISTANT, text=f"Error: {e}", is_error=True))
                outcome = SubmitOutcome.FAILED
            else:
                reply = response.content or self._empty_reply_text
                self._append(Message(role=Role.ASSISTANT, text=reply))
                await self._play(reply)
                outcome = SubmitOutcome.REPLIED

            self.set_pending_input("")
            return outcome

    async def _play(self, reply: str) -> None:
        if self._synthesizer is None:
            return
        try:
            await self._synthesizer.speak(reply)
        except Exception as e:
            self._debug("error", "Chat", f"Playback failed: {e}")

    async def toggle_listening(self) -> ListenOutcome:
        async with self._toggle_lock:
            if self._listening:
                self._set_listening(False)
                self._recognizer.stop()
                return ListenOutcome.STOPPED
            return await self._start_listening()

    async def _start_listening(self) -> ListenOutcome:
        status = await self._permissions.status(Capability.MICROPHONE)
        if not status.is_granted:
            status = await self._permissions.request(Capability.MICROPHONE)
        if not status.is_granted:
            self._debug("warning", "Chat", f"Microphone permission {status.value}")
            return ListenOutcome.PERMISSION_DENIED

        try:
            available = await self._recognizer.initialize()
        except Exception as e:
            self._debug("error", "Chat", f"Recognizer failed to initialize: {e}")
            available = False
        if not available:
            return ListenOutcome.UNAVAILABLE

        self._set_listening(True)
        try:
            self._recognizer.listen(self._on_recognized)
        except Exception as e:
            self._debug("error", "Chat", f"Recognizer failed to start: {e}")
            self._set_listening(False)
            return ListenOutcome.UNAVAILABLE
        return ListenOutcome.STARTED

    def _on_recognized(self, text: str) -> None:
        # Late results after stop() are dropped
        if self._listening:
            self.set_pending_input(text)

    def _set_listening(self, value: bool) -> None:
        self._listening = value
        self._debug("debug", "Chat", f"Listening={value}")
        if self._on_listening:
            self._on_listening(value)

    def _append(self, message: Message) -> None:
        self._transcript.append(message)
        if self._on_message:
            self._on_message(message)
