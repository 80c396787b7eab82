from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Represents a message sent to an LLM provider."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str | None = Field(
        default=None,
        description="Generated text content, None when the backend returned no text"
    )
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
