"""Data models for the controllers."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A chat transcript entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)
    # Set on replies that report a failed request, not on replies mentioning errors
    is_error: bool = False


class SubmitOutcome(str, Enum):
    """What ChatController.submit() did with the input."""

    IGNORED = "ignored"  # blank input, transcript untouched
    REPLIED = "replied"
    FAILED = "failed"


class ListenOutcome(str, Enum):
    """What ChatController.toggle_listening() did."""

    STARTED = "started"
    STOPPED = "stopped"
    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
