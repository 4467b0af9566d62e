"""Error types raised by the assistant orchestration layer."""

from src.models.remote import RunStatus


class AssistantError(Exception):
    """Base class for all orchestration failures."""

    pass


class NotInitializedError(AssistantError):
    """Raised when a session identifier is missing.

    Raised before any remote call is attempted.
    """

    def __init__(self, *missing: str) -> None:
        self.missing = missing
        names = ", ".join(missing) or "session"
        super().__init__(f"System not initialized yet (missing {names})")


class UploadValidationError(AssistantError):
    """Raised when a file is rejected locally before upload."""

    def __init__(self, reason: str, *, too_large: bool = False) -> None:
        self.reason = reason
        self.too_large = too_large
        super().__init__(reason)


class RemoteCallError(AssistantError):
    """Raised when the remote service rejects or fails a request.

    The upstream message is kept verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status {self.status_code})"


class RunTerminatedError(AssistantError):
    """Raised when a run ends in a failure state."""

    def __init__(self, status: RunStatus) -> None:
        self.status = status
        super().__init__(f"Run {status.value}")


class RunTimeoutError(AssistantError):
    """Raised when a run is still going after the last poll attempt."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Run timed out after {attempts} status checks")


class PollError(AssistantError):
    """Raised when a run status request itself fails."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Error polling run status: {cause}")


class UploadError(AssistantError):
    """Raised when a remote step of file ingestion fails.

    Attributes:
        filename: Name of the file being ingested.
        stage: "upload" or "attach".
        file_id: Remote file id when the upload itself succeeded.
    """

    def __init__(self, filename: str, stage: str, file_id: str | None = None) -> None:
        self.filename = filename
        self.stage = stage
        self.file_id = file_id
        if stage == "upload":
            detail = "Failed to upload file"
        else:
            detail = "Failed to add file to vector store"
        super().__init__(f'{detail} "{filename}"')


class SessionBusyError(AssistantError):
    """Raised when a send is still outstanding and the session must not change."""

    def __init__(self) -> None:
        super().__init__("A message is already being processed")
