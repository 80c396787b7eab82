"""Gemini reply service backed by the google-genai SDK.

Reference: https://github.com/googleapis/python-genai

A reply with no text (blocked by safety filters, or no candidates at all)
comes back as ``LLMResponse(content=None)``. The chat controller shows its
own placeholder for that case, so it is not treated as an error here.
"""

from typing import Any

from google import genai
from google.genai import errors, types

from ...errors import ReplyServiceError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

DEFAULT_MODEL = "gemini-2.0-flash"

# Gemini calls the assistant role "model"; system text goes in the config
_ROLE_MAP = {"user": "user", "assistant": "model"}


def _response_text(response: Any) -> str | None:
    """Join the text parts of the first candidate, or None if there are none."""
    for candidate in (response.candidates or [])[:1]:
        parts = candidate.content.parts if candidate.content else None
        texts = [part.text for part in parts or [] if getattr(part, "text", None)]
        if texts:
            return "".join(texts)

    # response.text raises on some blocked responses
    try:
        return response.text or None
    except (ValueError, AttributeError):
        return None


def _response_usage(response: Any) -> dict[str, int] | None:
    meta = response.usage_metadata
    if not meta:
        return None
    return {
        "prompt_tokens": meta.prompt_token_count or 0,
        "completion_tokens": meta.candidates_token_count or 0,
        "total_tokens": meta.total_token_count or 0,
    }


class GeminiProvider(LLMProvider):
    """Reply service for Google Gemini models.

    Hidden design decisions:
    - Client construction from an API key
    - Role names and system-instruction placement in Gemini requests
    - Which SDK exceptions count as a failed reply
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, **client_kwargs: Any):
        """Create the SDK client.

        Args:
            api_key: Google AI Studio API key
            model: Default model, e.g. gemini-2.0-flash or gemini-2.5-flash
            **client_kwargs: Passed through to genai.Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    def _convert_messages(self, messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
        """Split messages into (system_instruction, contents)."""
        system_instruction = None
        contents: list[types.Content] = []
        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
                continue
            role = _ROLE_MAP.get(msg.role)
            if role is not None:
                contents.append(types.Content(role=role, parts=[types.Part(text=msg.content)]))
        return system_instruction, contents

    def _extract_content(self, response: Any) -> str | None:
        return _response_text(response)

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Ask Gemini for one reply.

        Raises:
            ReplyServiceError: Gemini rejected the request or failed to answer
        """
        model_name = model or self._model
        system_instruction, contents = self._convert_messages(messages)
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            max_output_tokens=max_tokens,
            **kwargs
        )

        self._debug("debug", "LLM", f"generate_content model={model_name} parts={len(contents)}")
        try:
            response = await self._client.aio.models.generate_content(
                model=model_name, contents=contents, config=config
            )
        except errors.APIError as e:
            self._debug("error", "LLM", f"Gemini API error: {e}")
            raise ReplyServiceError(str(e)) from e

        content = self._extract_content(response)
        if content is None:
            self._debug("warning", "LLM", "Gemini returned no text")
        return LLMResponse(content=content, model=model_name, usage=_response_usage(response))

    async def close(self) -> None:
        # Older SDK releases have no aclose()
        aclose = getattr(self._client.aio, "aclose", None)
        if aclose is not None:
            await aclose()
