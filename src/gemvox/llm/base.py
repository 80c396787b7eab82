from abc import ABC, abstractmethod
from typing import Any

from ..diagnostics import DebugEmitter
from .models import ChatMessage, LLMResponse


class LLMProvider(DebugEmitter, ABC):
    """Generative reply service.

    Hides which hosted model answers prompts. A provider owns its SDK
    client, converts ChatMessage lists into the backend's request format,
    and reports backend failures as ReplyServiceError. A reply without text
    is a successful LLMResponse with content=None.

    Use as an async context manager to release the client:
        async with provider:
            reply = await provider.generate("Hello")
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model name."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Send messages and return one reply.

        Args:
            messages: Request messages, oldest first
            model: Model override for this call
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Cap on generated tokens
            **kwargs: Backend-specific generation options

        Raises:
            ReplyServiceError: The backend failed to produce a reply
        """

    async def generate(self, prompt: str, **kwargs: Any) -> LLMResponse:
        """Reply to a single user prompt, without any earlier turns."""
        message = ChatMessage(role="user", content=prompt)
        return await self.chat_completion([message], **kwargs)

    @abstractmethod
    async def close(self) -> None:
        """Release the SDK client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            await self.close()
        except RuntimeError as e:
            # httpx transports can fail to close once the loop is gone
            if "Event loop is closed" not in str(e):
                raise
