"""Unit tests for the LLM module."""
from types import SimpleNamespace

import pytest

from conftest import FakeReplyService

from gemvox.errors import ReplyServiceError
from gemvox.llm import ChatMessage, GeminiProvider, LLMProvider, LLMResponse, create_llm_provider


def gemini_response(*texts, usage=None):
    parts = [SimpleNamespace(text=t) for t in texts]
    candidates = [SimpleNamespace(content=SimpleNamespace(parts=parts))] if parts else []
    return SimpleNamespace(candidates=candidates, usage_metadata=usage, text="".join(texts) or None)


def stub_client(provider: GeminiProvider, handler) -> list[dict]:
    """Replace the provider's SDK client; returns the recorded calls."""
    calls: list[dict] = []

    async def generate_content(**kwargs):
        calls.append(kwargs)
        return handler()

    provider._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
    return calls


class TestLLMProvider:
    """Tests for LLMProvider interface."""

    def test_llm_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore

    @pytest.mark.asyncio
    async def test_generate_sends_single_user_message(self):
        """Test that generate() wraps the prompt with no extra context."""
        service = FakeReplyService(replies=["hi"])

        response = await service.generate("hello")

        assert response.content == "hi"
        assert service.messages == [[ChatMessage(role="user", content="hello")]]

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        """Test that leaving the async context closes the provider."""
        service = FakeReplyService()
        async with service as entered:
            assert entered is service
        assert service.closed


class TestLLMModels:
    """Tests for the LLM data models."""

    def test_response_content_defaults_to_none(self):
        """Test that an empty response is representable."""
        response = LLMResponse(model="gemini-2.0-flash")
        assert response.content is None
        assert response.usage is None

    def test_chat_message_is_frozen(self):
        """Test that chat messages are immutable."""
        message = ChatMessage(role="user", content="hi")
        with pytest.raises(Exception):
            message.content = "changed"


class TestCreateLLMProvider:
    """Tests for the provider factory."""

    def test_unsupported_provider(self):
        """Test that an unknown provider raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("openai", api_key="sk-test")

    def test_gemini_requires_api_key(self):
        """Test that Gemini without an API key raises TypeError."""
        with pytest.raises(TypeError):
            create_llm_provider("gemini")

    @pytest.mark.parametrize("name", ["gemini", "Gemini", "google"])
    def test_creates_gemini(self, name):
        """Test that Gemini aliases build a GeminiProvider."""
        provider = create_llm_provider(name, api_key="test-key", model="gemini-2.5-flash")

        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-flash"


class TestGeminiProvider:
    """Tests for GeminiProvider with a stubbed SDK client."""

    @pytest.fixture
    def provider(self):
        return GeminiProvider(api_key="test-key")

    def test_default_model(self, provider):
        """Test the default Gemini model."""
        assert provider.model == "gemini-2.0-flash"

    def test_convert_messages(self, provider):
        """Test that roles map to Gemini's user/model roles."""
        system, contents = provider._convert_messages([
            ChatMessage(role="system", content="Be brief"),
            ChatMessage(role="user", content="Hi"),
            ChatMessage(role="assistant", content="Hello"),
        ])

        assert system == "Be brief"
        assert [c.role for c in contents] == ["user", "model"]
        assert contents[0].parts[0].text == "Hi"

    def test_extract_joins_parts(self, provider):
        """Test that multi-part candidates are joined."""
        assert provider._extract_content(gemini_response("Hello", ", world")) == "Hello, world"

    def test_extract_no_text_is_none(self, provider):
        """Test that a response with no candidates has no content."""
        assert provider._extract_content(gemini_response()) is None

    @pytest.mark.asyncio
    async def test_chat_completion(self, provider):
        """Test a successful completion with usage metadata."""
        usage = SimpleNamespace(prompt_token_count=3, candidates_token_count=5, total_token_count=8)
        calls = stub_client(provider, lambda: gemini_response("Paris", usage=usage))

        response = await provider.generate("Capital of France?")

        assert response.content == "Paris"
        assert response.model == "gemini-2.0-flash"
        assert response.usage == {"prompt_tokens": 3, "completion_tokens": 5, "total_tokens": 8}
        assert calls[0]["model"] == "gemini-2.0-flash"
        assert len(calls[0]["contents"]) == 1

    @pytest.mark.asyncio
    async def test_empty_completion_warns(self, provider, debug_recorder):
        """Test that an empty reply is returned as None and logged."""
        stub_client(provider, lambda: gemini_response())
        provider.set_debug_callback(debug_recorder)

        response = await provider.generate("Hi")

        assert response.content is None
        assert "warning" in debug_recorder.levels("LLM")

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self, provider):
        """Test that SDK API errors surface as ReplyServiceError."""
        from google.genai import errors

        def _fail():
            raise errors.ClientError(
                400, {"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}}
            )

        stub_client(provider, _fail)

        with pytest.raises(ReplyServiceError, match="API key not valid"):
            await provider.generate("Hi")

    @pytest.mark.asyncio
    async def test_close_without_transport(self, provider):
        """Test that close() tolerates clients without an async transport."""
        stub_client(provider, gemini_response)
        await provider.close()
