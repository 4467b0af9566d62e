"""Shapes returned by the remote assistant gateway.

These are trimmed views of the SDK objects: only the fields the
orchestration layer actually reads.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from src.models.chat import MessageRole


class RunStatus(str, Enum):
    """Lifecycle states of a remote assistant run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"
    INCOMPLETE = "incomplete"


class FilePurpose(str, Enum):
    """Files API purposes accepted for uploads that feed a vector store."""

    ASSISTANTS = "assistants"
    USER_DATA = "user_data"


class RemoteObject(BaseModel):
    """Id-only result of a remote create call."""

    id: str


class RunState(BaseModel):
    """Snapshot of a run's status. Discarded once polling ends.

    Attributes:
        id: Run identifier.
        thread_id: Thread the run executes against.
        status: Current lifecycle state.
    """

    id: str
    thread_id: str
    status: RunStatus


class RemoteMessage(BaseModel):
    """A message as stored on the remote thread.

    Attributes:
        id: Remote message identifier.
        role: Author role.
        content: Text of the first text content block, or empty.
        created_at: Remote creation time (second resolution, UTC).
    """

    id: str
    role: MessageRole
    content: str = ""
    created_at: datetime


class SearchHit(BaseModel):
    """One vector store search result."""

    file_id: str
    filename: str
    score: float = Field(ge=0.0)
    text: str = ""
