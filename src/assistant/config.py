"""Assistant configuration with environment variable loading.

Pydantic-based configuration for the hosted assistant session.
Supports OpenAI and OpenAI-compatible APIs via custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_INSTRUCTIONS = (
    "You are a helpful AI assistant with access to vector stores, "
    "web search, and file search capabilities."
)

DEFAULT_ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx", ".txt", ".csv", ".json", ".md")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class AssistantConfig(BaseModel):
    """Configuration for the assistant session.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL (None for OpenAI default).
        model_name: Model the assistant runs on.
        assistant_name: Display name of the created assistant.
        assistant_instructions: System instructions for the assistant.
        vector_store_name: Name of the vector store created per session.
        request_timeout_seconds: Per-request timeout for remote calls.
        poll_interval_seconds: Delay between run status checks.
        max_poll_attempts: Status checks before a run is declared timed out.
        expired_is_terminal: Treat the "expired" run status as a failure
            instead of polling on.
        allowed_extensions: File extensions accepted for upload.
        max_file_size_mb: Upload size limit in megabytes.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", ""),
        validate_default=True,
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for OpenAI default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o"),
        description="Model to use",
    )
    assistant_name: str = Field(default="Magic Chat AI", min_length=1)
    assistant_instructions: str = Field(default=DEFAULT_INSTRUCTIONS, min_length=1)
    vector_store_name: str = Field(default="Magic Chat Vector Store", min_length=1)
    request_timeout_seconds: float = Field(default=60.0, gt=0.0)
    poll_interval_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Seconds to wait between run status checks",
    )
    max_poll_attempts: int = Field(
        default=30,
        ge=1,
        le=600,
        description="Status checks before giving up on a run",
    )
    expired_is_terminal: bool = Field(
        default_factory=lambda: _env_flag("RUN_EXPIRED_IS_TERMINAL"),
        description="Fail fast when a run reports 'expired'",
    )
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    max_file_size_mb: float = Field(default=20.0, gt=0.0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env"
            )
        return v.strip()

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: object) -> object:
        """Lowercase extensions and make sure each has a leading dot."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple, set)):
            normalized = []
            for ext in v:
                ext = str(ext).strip().lower()
                if not ext:
                    continue
                normalized.append(ext if ext.startswith(".") else f".{ext}")
            return tuple(normalized)
        return v

    @property
    def max_file_size_bytes(self) -> int:
        """Upload size limit in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AssistantConfig()
