from pydantic import BaseModel, Field, field_validator

from src.models.chat import Message, MessageRole
from src.models.remote import SearchHit


class ChatRequest(BaseModel):
    """Request payload for sending a message to the assistant.

    Attributes:
        message: User's question or prompt.
        instructions: Optional per-run instruction override.
    """

    message: str = Field(..., min_length=1)
    instructions: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Result of one conversation turn.

    Attributes:
        reply: The merged assistant reply, or None when no newer reply was found.
        messages: The full conversation after the turn.
    """

    reply: Message | None = None
    messages: list[Message]


class SessionInfo(BaseModel):
    """Identifiers of the current assistant session."""

    assistant_id: str | None = None
    thread_id: str | None = None
    vector_store_id: str | None = None
    in_flight: bool = False


class CompletionMessage(BaseModel):
    """A role/content pair for a direct chat completion."""

    role: MessageRole
    content: str = Field(..., min_length=1)


class CompletionRequest(BaseModel):
    """Request payload for a direct chat completion (no assistant, no thread)."""

    messages: list[CompletionMessage] = Field(..., min_length=1)
    model: str | None = None


class CompletionResponse(BaseModel):
    """The completion's reply message."""

    role: MessageRole
    content: str


class UploadResponse(BaseModel):
    """Response after a file has been uploaded and indexed.

    Attributes:
        filename: Name of the uploaded file.
        message: The synthesized conversation entry describing the ingestion.
        success: Whether the upload was successful.
    """

    filename: str
    message: Message
    success: bool = True


class SearchRequest(BaseModel):
    """Vector store search request."""

    query: str = Field(..., min_length=1)
    max_results: int = Field(default=10, ge=1, le=50)


class SearchResponse(BaseModel):
    """Vector store search results, best match first."""

    results: list[SearchHit]
