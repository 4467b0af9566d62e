"""File ingestion into the session's vector store.

Handles local validation, upload, and vector store attachment.
"""

import logging
import mimetypes
from collections.abc import Callable
from datetime import datetime
from pathlib import PurePath

from src.assistant.config import AssistantConfig
from src.assistant.errors import NotInitializedError, RemoteCallError, UploadError, UploadValidationError
from src.assistant.gateway import AssistantGateway
from src.assistant.notifications import NotificationBus
from src.assistant.session import ChatSession
from src.models.chat import Message, MessageRole, utc_now
from src.models.remote import FilePurpose

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class IngestionCoordinator:
    """Uploads files and adds them to the session's vector store."""

    def __init__(
        self,
        config: AssistantConfig,
        gateway: AssistantGateway,
        session: ChatSession,
        notifications: NotificationBus,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._config = config
        self._gateway = gateway
        self._session = session
        self._notifications = notifications
        self._clock = clock

    def validate(self, filename: str | None, content: bytes) -> str:
        """Check a file against the extension allow-list and size limit.

        Args:
            filename: The uploaded filename.
            content: Raw file bytes.

        Returns:
            The validated filename.

        Raises:
            UploadValidationError: If the file is unnamed, empty, of a
                disallowed type, or too large.
        """
        if not filename or not filename.strip():
            raise UploadValidationError("Filename is required")

        extension = PurePath(filename).suffix.lower()
        if extension not in self._config.allowed_extensions:
            allowed = ", ".join(self._config.allowed_extensions)
            raise UploadValidationError(
                f'File type "{extension or filename}" is not supported. Accepted types: {allowed}'
            )

        if not content:
            raise UploadValidationError("Empty file provided")

        if len(content) > self._config.max_file_size_bytes:
            size_mb = len(content) / (1024 * 1024)
            raise UploadValidationError(
                f"File size ({size_mb:.1f}MB) exceeds maximum allowed "
                f"({self._config.max_file_size_mb:g}MB)",
                too_large=True,
            )

        return filename

    async def upload_and_index(
        self,
        filename: str | None,
        content: bytes,
        mime_type: str | None = None,
        purpose: FilePurpose = FilePurpose.ASSISTANTS,
    ) -> Message:
        """Upload a file and attach it to the session's vector store.

        Args:
            filename: Original filename (used for the type check and remotely).
            content: Raw file bytes.
            mime_type: Content type; guessed from the filename when omitted.
            purpose: Files API purpose for the upload.

        Returns:
            The informational assistant message added to the conversation.

        Raises:
            NotInitializedError: If the vector store id is missing.
            UploadValidationError: If the file fails local validation.
            ValueError: If purpose is not a supported upload purpose.
            UploadError: If the upload or the vector store attach fails.
        """
        try:
            self._session.require("vector_store_id")
            filename = self.validate(filename, content)
            purpose = FilePurpose(purpose)
        except (NotInitializedError, UploadValidationError, ValueError) as e:
            self._notifications.error(f"Error: {e}")
            raise

        vector_store_id = self._session.vector_store_id
        mime_type = mime_type or mimetypes.guess_type(filename)[0] or DEFAULT_MIME_TYPE

        file_id = None
        try:
            uploaded = await self._gateway.upload_file(content, filename, mime_type, purpose.value)
            file_id = uploaded.id
            logger.info(f"Uploaded {filename} as {file_id} ({len(content)} bytes)")
            await self._gateway.add_files_to_vector_store(vector_store_id, [file_id])
        except RemoteCallError as e:
            stage = "upload" if file_id is None else "attach"
            error = UploadError(filename, stage, file_id)
            self._notifications.error(f"Error: {error}: {e}")
            raise error from e

        logger.info(f"Added {file_id} to vector store {vector_store_id}")
        self._notifications.success(f'File "{filename}" uploaded and added to vector store')

        return self._session.append(
            Message(
                role=MessageRole.ASSISTANT,
                content=(
                    f'File "{filename}" has been uploaded and added to the vector store. '
                    "You can now ask questions about its contents."
                ),
                created_at=self._clock(),
            )
        )
