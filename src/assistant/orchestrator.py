"""Conversation orchestration against the hosted assistant.

A chat turn is a strict sequence of remote calls:

1. Append the user's message locally (optimistic, never rolled back).
2. Add the message to the remote thread.
3. Start a run of the assistant on the thread.
4. Poll the run until it completes.
5. List the thread's messages and merge the reply.

The reply is picked by time, not by run id: the newest assistant message
created strictly after the local user message. This relies on one run at a
time per thread and on the local and remote clocks roughly agreeing. If no
such message exists the turn ends quietly with no reply.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from src.assistant.config import AssistantConfig
from src.assistant.errors import NotInitializedError, SessionBusyError
from src.assistant.gateway import AssistantGateway
from src.assistant.notifications import NotificationBus
from src.assistant.poller import RunPoller
from src.assistant.session import ChatSession
from src.models.chat import Message, MessageRole, utc_now
from src.models.remote import RemoteMessage

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hello! I am {name}, your intelligent assistant. I can help you with various "
    "tasks, answer questions, and process files. How can I assist you today?"
)


def find_reply(remote_messages: list[RemoteMessage], after: datetime) -> RemoteMessage | None:
    """Return the first assistant message created strictly after ``after``.

    ``remote_messages`` is expected newest first, so the first match is the
    most recent reply.
    """
    for remote in remote_messages:
        if remote.role == MessageRole.ASSISTANT and remote.created_at > after:
            return remote
    return None


class ConversationOrchestrator:
    """Owns session initialization and chat turns."""

    def __init__(
        self,
        config: AssistantConfig,
        gateway: AssistantGateway,
        session: ChatSession,
        poller: RunPoller,
        notifications: NotificationBus,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._config = config
        self._gateway = gateway
        self._session = session
        self._poller = poller
        self._notifications = notifications
        self._clock = clock
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        """True while a send is outstanding. Callers must not send again until False."""
        return self._in_flight

    async def initialize(self) -> ChatSession:
        """Create the assistant, thread and vector store for a new session.

        Any previous identifiers and conversation are discarded first.
        Refused while a send is outstanding.

        Returns:
            The session, now holding all three identifiers.

        Raises:
            SessionBusyError: If a send is in flight.
            RemoteCallError: If any create call fails.
        """
        if self._in_flight:
            error = SessionBusyError()
            self._notifications.error(str(error))
            raise error

        self._session.reset()
        try:
            assistant = await self._gateway.create_assistant(
                self._config.assistant_name,
                self._config.assistant_instructions,
                self._config.model_name,
            )
            self._session.assistant_id = assistant.id

            thread = await self._gateway.create_thread()
            self._session.thread_id = thread.id

            vector_store = await self._gateway.create_vector_store(self._config.vector_store_name)
            self._session.vector_store_id = vector_store.id

            await self._gateway.attach_vector_store_to_thread(thread.id, vector_store.id)
        except Exception as e:
            self._notifications.error(f"Error: {e}")
            raise

        logger.info(
            f"Session initialized: assistant={assistant.id} thread={thread.id} "
            f"vector_store={vector_store.id}"
        )
        self._session.append(
            Message(
                id="welcome",
                role=MessageRole.ASSISTANT,
                content=WELCOME_MESSAGE.format(name=self._config.assistant_name),
                created_at=self._clock(),
            )
        )
        self._notifications.success("System initialized successfully")
        return self._session

    async def send_message(self, content: str, instructions: str | None = None) -> Message | None:
        """Run one chat turn.

        Args:
            content: The user's message.
            instructions: Optional instruction override for this run only.

        Returns:
            The merged assistant reply, or None when the thread held no
            assistant message newer than the user's message.

        Raises:
            SessionBusyError: If another send is in flight.
            NotInitializedError: If the assistant or thread id is missing.
            ValueError: If content is empty.
            RemoteCallError: If adding the message, starting the run or
                listing messages fails.
            RunTerminatedError, RunTimeoutError, PollError: If polling fails.
        """
        try:
            if self._in_flight:
                raise SessionBusyError()
            self._session.require("assistant_id", "thread_id")
            if not content or not content.strip():
                raise ValueError("Message content is required")
        except (SessionBusyError, NotInitializedError, ValueError) as e:
            self._notifications.error(str(e))
            raise

        thread_id = self._session.thread_id
        assistant_id = self._session.assistant_id

        user_message = self._session.append(
            Message(role=MessageRole.USER, content=content, created_at=self._clock())
        )

        self._in_flight = True
        try:
            await self._gateway.add_message(thread_id, content, MessageRole.USER)
            run = await self._gateway.run_assistant(thread_id, assistant_id, instructions)
            logger.info(f"Started run {run.id} on thread {thread_id}")
            await self._poller.poll(thread_id, run.id)
            remote_messages = await self._gateway.list_messages(thread_id)
        except Exception as e:
            self._notifications.error(f"Error: {e}")
            raise
        finally:
            self._in_flight = False

        return self._merge_reply(remote_messages, user_message)

    def _merge_reply(
        self, remote_messages: list[RemoteMessage], user_message: Message
    ) -> Message | None:
        reply = find_reply(remote_messages, user_message.created_at)
        if reply is None:
            logger.info(f"No assistant reply newer than message {user_message.id}")
            return None
        if self._session.has_message(reply.id):
            logger.info(f"Reply {reply.id} already in conversation, not appending")
            return None

        return self._session.append(
            Message(
                id=reply.id,
                role=MessageRole.ASSISTANT,
                content=reply.content,
                created_at=reply.created_at,
            )
        )
