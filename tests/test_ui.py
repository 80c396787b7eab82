"""Smoke tests for the Textual app using the headless pilot."""
import pytest

from conftest import FakePermissions, FakeRecognizer, FakeReplyService, FakeSynthesizer

from gemvox.controllers import ChatController, SpeakController, ThemeController
from gemvox.preferences import THEME_KEY, create_preference_store
from gemvox.speech import PermissionStatus
from gemvox.ui import ChatHistoryWidget, ChatInputBar, DebugPanel, GemvoxApp, SpeakPanel
from gemvox.ui.config import MIC_LABEL_IDLE, MIC_LABEL_LISTENING


@pytest.fixture
def parts():
    store = create_preference_store("memory")
    recognizer = FakeRecognizer()
    return {
        "store": store,
        "service": FakeReplyService(replies=["**Hello** there"]),
        "chat_synth": FakeSynthesizer(),
        "tts_synth": FakeSynthesizer(),
        "recognizer": recognizer,
        "permissions": FakePermissions(),
    }


async def make_app(parts, **kwargs) -> GemvoxApp:
    chat = ChatController(
        reply_service=parts["service"],
        synthesizer=parts["chat_synth"],
        recognizer=parts["recognizer"],
        permissions=parts["permissions"],
    )
    theme = await ThemeController.load(parts["store"])
    return GemvoxApp(
        chat=chat,
        speaker=SpeakController(parts["tts_synth"]),
        theme=theme,
        model_name="fake-model",
        **kwargs,
    )


class TestGemvoxApp:
    """Tests for GemvoxApp."""

    @pytest.mark.asyncio
    async def test_starts_in_stored_theme(self, parts):
        """Test that the persisted flag selects the dark theme on launch."""
        await parts["store"].set_bool(THEME_KEY, True)
        app = await make_app(parts)

        async with app.run_test():
            assert app.theme == "gemvox-dark"
            assert app.sub_title == "fake-model"
            assert not app.query_one("#debug-panel", DebugPanel).display

    @pytest.mark.asyncio
    async def test_toggle_theme_applies_and_persists(self, parts):
        """Test that toggling switches the theme and saves the flag."""
        app = await make_app(parts)

        async with app.run_test() as pilot:
            assert app.theme == "gemvox-light"
            app.action_toggle_theme()
            await pilot.pause()
            assert app.theme == "gemvox-dark"
            await app._theme_controller.flush()

        assert await parts["store"].get_bool(THEME_KEY) is True

    @pytest.mark.asyncio
    async def test_submit_from_input(self, parts):
        """Test that typing and pressing enter adds a chat turn."""
        app = await make_app(parts)

        async with app.run_test() as pilot:
            await pilot.click("#chat-input")
            await pilot.press(*"hi")
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.pause()

            history = app.query_one("#chat-history", ChatHistoryWidget)
            assert history.message_count == 2
            assert history.get_last_response() == "**Hello** there"
            assert app.query_one("#chat-input-bar", ChatInputBar).value == ""

        assert parts["service"].prompts == ["hi"]
        assert parts["chat_synth"].spoken == ["**Hello** there"]

    @pytest.mark.asyncio
    async def test_mic_streams_into_input(self, parts):
        """Test that recognition results fill the chat input."""
        app = await make_app(parts)

        async with app.run_test() as pilot:
            bar = app.query_one("#chat-input-bar", ChatInputBar)
            app.action_toggle_listening()
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app.query_one("#mic-btn").label.plain == MIC_LABEL_LISTENING

            parts["recognizer"].emit("hello world")
            await pilot.pause()
            assert bar.value == "hello world"

            app.action_toggle_listening()
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app.query_one("#mic-btn").label.plain == MIC_LABEL_IDLE

        assert parts["recognizer"].stop_calls == 1

    @pytest.mark.asyncio
    async def test_mic_denied_stays_idle(self, parts):
        """Test that a refused microphone leaves the mic button idle."""
        parts["permissions"] = FakePermissions(
            initial=PermissionStatus.DENIED, on_request=PermissionStatus.DENIED
        )
        app = await make_app(parts)

        async with app.run_test() as pilot:
            app.action_toggle_listening()
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app.query_one("#mic-btn").label.plain == MIC_LABEL_IDLE

        assert parts["recognizer"].initialize_calls == 0

    @pytest.mark.asyncio
    async def test_speak_panel(self, parts):
        """Test that the TTS tab speaks with en-US at normal pitch."""
        app = await make_app(parts)

        async with app.run_test() as pilot:
            panel = app.query_one("#speak-panel", SpeakPanel)
            panel.post_message(SpeakPanel.SpeakRequested("Read this"))
            await pilot.pause()
            await app.workers.wait_for_complete()

        assert parts["tts_synth"].calls == [
            ("set_language", "en-US"),
            ("set_pitch", 1.0),
            ("speak", "Read this"),
        ]

    @pytest.mark.asyncio
    async def test_log_panel_shown_with_level(self, parts):
        """Test that a log level makes the panel visible."""
        app = await make_app(parts, log_level="debug")

        async with app.run_test():
            assert app.query_one("#debug-panel", DebugPanel).display

    @pytest.mark.asyncio
    async def test_only_failed_replies_are_styled_as_errors(self, parts):
        """Test that a reply mentioning "Error: " is not drawn as a failure."""
        parts["service"] = FakeReplyService(replies=["Error: codes explained", RuntimeError("boom")])
        app = await make_app(parts)

        async with app.run_test() as pilot:
            await app._chat.submit("what do HTTP errors mean?")
            await app._chat.submit("again")
            await pilot.pause()

            history = app.query_one("#chat-history", ChatHistoryWidget)
            assert history.message_count == 4
            errors = app.query(".error-message")
            assert len(errors) == 1
            assert errors.first()._content == "Error: boom"
