"""Pytest configuration and shared fixtures."""
import asyncio
from typing import Any

import pytest

from gemvox.errors import PreferenceStoreError, ReplyServiceError
from gemvox.llm import ChatMessage, LLMProvider, LLMResponse
from gemvox.preferences import PreferenceStore, create_preference_store
from gemvox.speech import (
    Capability,
    PermissionAuthority,
    PermissionStatus,
    SpeechRecognizer,
    SpeechSynthesizer,
)


class FakeReplyService(LLMProvider):
    """Reply service that answers from a script instead of the network.

    Each entry in `replies` is either the reply text (None for an empty
    response) or an exception to raise. Once the script runs out the prompt
    is echoed back.
    """

    def __init__(self, replies: list[Any] | None = None, gate: asyncio.Event | None = None):
        self.replies = list(replies or [])
        self.prompts: list[str] = []
        self.messages: list[list[ChatMessage]] = []
        self.gate = gate
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(self, messages, model=None, temperature=0.7, max_tokens=None, **kwargs):
        self.messages.append(list(messages))
        prompt = messages[-1].content
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()

        reply = self.replies.pop(0) if self.replies else f"echo: {prompt}"
        if isinstance(reply, BaseException):
            raise reply
        return LLMResponse(content=reply, model=self.model)

    async def close(self) -> None:
        self.closed = True


class FakeSynthesizer(SpeechSynthesizer):
    """Synthesizer that records every call in order."""

    def __init__(self, fail_with: Exception | None = None):
        self.calls: list[tuple[str, Any]] = []
        self.fail_with = fail_with
        self.closed = False

    @property
    def spoken(self) -> list[str]:
        return [arg for name, arg in self.calls if name == "speak"]

    async def set_language(self, tag: str) -> None:
        self.calls.append(("set_language", tag))

    async def set_pitch(self, value: float) -> None:
        self.calls.append(("set_pitch", value))

    async def speak(self, text: str) -> None:
        self.calls.append(("speak", text))
        if self.fail_with is not None:
            raise self.fail_with

    async def close(self) -> None:
        self.closed = True


class FakeRecognizer(SpeechRecognizer):
    """Recognizer driven by the test through emit()."""

    def __init__(self, available: bool = True, init_error: Exception | None = None):
        self.available = available
        self.init_error = init_error
        self.initialize_calls = 0
        self.stop_calls = 0
        self.on_result = None

    async def initialize(self) -> bool:
        self.initialize_calls += 1
        if self.init_error is not None:
            raise self.init_error
        return self.available

    def listen(self, on_result) -> None:
        self.on_result = on_result

    def stop(self) -> None:
        self.stop_calls += 1

    def emit(self, text: str) -> None:
        assert self.on_result is not None, "listen() was never called"
        self.on_result(text)


class FakePermissions(PermissionAuthority):
    """Permission authority with a fixed answer to request()."""

    def __init__(
        self,
        initial: PermissionStatus = PermissionStatus.DENIED,
        on_request: PermissionStatus = PermissionStatus.GRANTED,
    ):
        self.current = initial
        self.on_request = on_request
        self.request_calls = 0

    async def status(self, capability: Capability) -> PermissionStatus:
        return self.current

    async def request(self, capability: Capability) -> PermissionStatus:
        self.request_calls += 1
        if not self.current.is_granted:
            self.current = self.on_request
        return self.current


class FailingPreferenceStore(PreferenceStore):
    """Store whose reads and writes always fail."""

    def __init__(self):
        self.write_attempts = 0

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def get_bool(self, key: str) -> bool | None:
        raise PreferenceStoreError("disk unavailable")

    async def set_bool(self, key: str, value: bool) -> None:
        self.write_attempts += 1
        raise PreferenceStoreError("disk unavailable")

    @property
    def backend_type(self) -> str:
        return "failing"


class DebugRecorder:
    """Collects (level, component, message) tuples from a debug callback."""

    def __init__(self):
        self.entries: list[tuple[str, str, str]] = []

    def __call__(self, level: str, component: str, message: str) -> None:
        self.entries.append((level, component, message))

    def levels(self, component: str | None = None) -> list[str]:
        return [lvl for lvl, comp, _ in self.entries if component is None or comp == component]


@pytest.fixture
def reply_service():
    """Return a scripted reply service."""
    return FakeReplyService()


@pytest.fixture
def synthesizer():
    """Return a recording synthesizer."""
    return FakeSynthesizer()


@pytest.fixture
def recognizer():
    """Return a controllable recognizer."""
    return FakeRecognizer()


@pytest.fixture
def permissions():
    """Return a permission authority that grants on request."""
    return FakePermissions()


@pytest.fixture
def debug_recorder():
    """Return a debug callback that records entries."""
    return DebugRecorder()


@pytest.fixture
async def memory_store():
    """Return a connected in-memory preference store."""
    store = create_preference_store("memory")
    await store.connect()
    yield store
    await store.disconnect()


@pytest.fixture
def failing_store():
    """Return a preference store that always fails."""
    return FailingPreferenceStore()


@pytest.fixture
def service_error():
    """Return a reply service error like the Gemini adapter raises."""
    return ReplyServiceError("quota exceeded")
