"""Chat service facade.

Wires the gateway, poller, orchestrator and ingestion coordinator around a
single ``ChatSession`` and exposes the surface the presentation layer uses:
initialize, send, upload, read the conversation, and subscribe to
notifications.

Singleton Pattern - the session lives in process memory, so every request
must see the same instance. ``get_chat_service`` builds it lazily.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from src.assistant.config import AssistantConfig, get_assistant_config
from src.assistant.errors import AssistantError
from src.assistant.gateway import AssistantGateway
from src.assistant.ingestion import IngestionCoordinator
from src.assistant.notifications import NotificationBus
from src.assistant.orchestrator import ConversationOrchestrator
from src.assistant.poller import RunPoller
from src.assistant.session import ChatSession
from src.models.chat import Message, MessageRole, utc_now
from src.models.remote import FilePurpose, SearchHit

logger = logging.getLogger(__name__)


class ChatService:
    """Single-session chat service.

    Operations are not reentrant: callers must wait for a send to finish
    (see ``in_flight``) before starting another.
    """

    def __init__(
        self,
        config: AssistantConfig | None = None,
        gateway: AssistantGateway | None = None,
        poller: RunPoller | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the chat service.

        Args:
            config: Optional configuration. Loads from environment if not provided.
            gateway: Optional gateway (tests pass a fake).
            poller: Optional poller. Built from config if not provided.
            clock: Source of local message timestamps.
        """
        self._config = config or get_assistant_config()
        self._gateway = gateway or AssistantGateway(self._config)
        self.session = ChatSession()
        self.notifications = NotificationBus()
        self._poller = poller or RunPoller(
            self._gateway,
            interval=self._config.poll_interval_seconds,
            max_attempts=self._config.max_poll_attempts,
            expired_is_terminal=self._config.expired_is_terminal,
        )
        self._orchestrator = ConversationOrchestrator(
            self._config, self._gateway, self.session, self._poller, self.notifications, clock
        )
        self._ingestion = IngestionCoordinator(
            self._config, self._gateway, self.session, self.notifications, clock
        )

    @property
    def messages(self) -> list[Message]:
        return self.session.messages

    @property
    def in_flight(self) -> bool:
        return self._orchestrator.in_flight

    async def initialize(self) -> ChatSession:
        return await self._orchestrator.initialize()

    async def send_message(self, content: str, instructions: str | None = None) -> Message | None:
        return await self._orchestrator.send_message(content, instructions)

    async def upload_and_index(
        self,
        filename: str | None,
        content: bytes,
        mime_type: str | None = None,
        purpose: FilePurpose = FilePurpose.ASSISTANTS,
    ) -> Message:
        return await self._ingestion.upload_and_index(filename, content, mime_type, purpose)

    async def search(self, query: str, max_results: int = 10) -> list[SearchHit]:
        """Search the session's vector store."""
        try:
            self.session.require("vector_store_id")
            return await self._gateway.search_vector_store(
                self.session.vector_store_id, query, max_results
            )
        except (AssistantError, ValueError) as e:
            self.notifications.error(f"Error: {e}")
            raise

    async def complete(
        self, messages: list[tuple[MessageRole, str]], model: str | None = None
    ) -> tuple[MessageRole, str]:
        """Direct chat completion, outside the assistant thread."""
        try:
            reply = await self._gateway.generate_chat_completion(
                [{"role": MessageRole(role).value, "content": content} for role, content in messages],
                model,
            )
        except (AssistantError, ValueError) as e:
            self.notifications.error(f"Error: {e}")
            raise
        return MessageRole(reply["role"]), reply["content"]


# Module-level singleton instance
_chat_service: ChatService | None = None


def get_chat_service() -> ChatService:
    """Get or create the global chat service.

    Returns:
        The ChatService instance.
    """
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService()
    return _chat_service
