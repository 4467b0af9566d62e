"""Client-side conversation models.

Messages and notifications as the presentation layer sees them.
"""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class NotificationSeverity(str, Enum):
    """Severity levels for user-facing notifications."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


def utc_now() -> datetime:
    """Return the current wall-clock time as an aware UTC datetime."""
    return datetime.now(UTC)


class Message(BaseModel):
    """A single message in the displayed conversation.

    Messages are immutable once created. Locally created messages get a
    random id and the client clock; merged replies keep the remote id and
    the remote creation time.

    Attributes:
        id: Message identifier.
        role: The speaker (user, assistant, or system).
        content: The message text.
        created_at: Creation timestamp (timezone-aware, UTC).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: MessageRole
    content: str
    created_at: datetime = Field(default_factory=utc_now)


class Notification(BaseModel):
    """Ephemeral UI event. Published once, never stored."""

    model_config = ConfigDict(frozen=True)

    message: str
    severity: NotificationSeverity = NotificationSeverity.INFO
