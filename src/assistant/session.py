"""Session context shared by the orchestrator and the ingestion coordinator.

A ``ChatSession`` holds the three remote identifiers and the displayed
conversation. It is passed by reference; only the orchestrator and the
ingestion coordinator mutate it, one operation at a time. That ordering
is a caller precondition: nothing here locks.
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass, field

from src.assistant.errors import NotInitializedError
from src.models.chat import Message

logger = logging.getLogger(__name__)


@dataclass
class ChatSession:
    """Identifiers and conversation for one chat session.

    Attributes:
        assistant_id: Remote assistant id, set by initialize.
        thread_id: Remote thread id, set by initialize.
        vector_store_id: Remote vector store id, set by initialize.
    """

    assistant_id: str | None = None
    thread_id: str | None = None
    vector_store_id: str | None = None
    _messages: list[Message] = field(default_factory=list, repr=False)

    @property
    def messages(self) -> list[Message]:
        """Conversation in display order (a copy)."""
        return list(self._messages)

    @property
    def is_initialized(self) -> bool:
        return bool(self.assistant_id and self.thread_id and self.vector_store_id)

    def require(self, *names: str) -> None:
        """Raise NotInitializedError unless every named identifier is set."""
        missing = tuple(name for name in names if not getattr(self, name))
        if missing:
            raise NotInitializedError(*missing)

    def has_message(self, message_id: str) -> bool:
        return any(m.id == message_id for m in self._messages)

    def append(self, message: Message) -> Message:
        """Insert a message keeping non-decreasing created_at order.

        Ties keep insertion order, so a message never jumps ahead of an
        earlier one with the same timestamp.
        """
        index = bisect_right([m.created_at for m in self._messages], message.created_at)
        self._messages.insert(index, message)
        logger.debug(f"Appended {message.role.value} message {message.id} at {index}")
        return message

    def reset(self) -> None:
        """Forget identifiers and conversation."""
        self.assistant_id = None
        self.thread_id = None
        self.vector_store_id = None
        self._messages.clear()
