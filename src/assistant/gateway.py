"""Remote assistant gateway over the OpenAI SDK.

Each method maps one logical action to one remote request. The gateway
checks that required identifiers are present, shapes parameters for the
SDK, and trims responses down to the models in ``src.models.remote``.
SDK failures are re-raised as ``RemoteCallError`` with the upstream
message and status code untouched. Nothing here retries or caches.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

import openai
from openai import AsyncOpenAI

from src.assistant.config import AssistantConfig
from src.assistant.errors import RemoteCallError
from src.models.chat import MessageRole
from src.models.remote import RemoteMessage, RemoteObject, RunState, RunStatus, SearchHit

logger = logging.getLogger(__name__)

ASSISTANT_TOOLS: list[dict[str, Any]] = [
    {"type": "file_search"},
    {"type": "code_interpreter"},
]


def _require(**values: Any) -> None:
    """Raise ValueError naming the first missing (empty) argument."""
    for name, value in values.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"{name} is required")
        if isinstance(value, (list, tuple)) and not value:
            raise ValueError(f"{name} must not be empty")


def _message_text(message: Any) -> str:
    """Return the text of the first content block, or "" for non-text content."""
    if not message.content:
        return ""
    block = message.content[0]
    if block.type == "text":
        return block.text.value
    return ""


class AssistantGateway:
    """Thin async call layer for assistants, threads, runs, files and vector stores."""

    def __init__(
        self,
        config: AssistantConfig,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Assistant configuration (credentials, model, timeouts).
            client: Optional pre-built SDK client. Built from config if omitted.
        """
        self._config = config
        self._client = client or AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.request_timeout_seconds,
            max_retries=0,
        )

    @contextmanager
    def _remote_call(self, action: str) -> Iterator[None]:
        """Translate SDK errors for one remote request into RemoteCallError."""
        logger.debug(f"Remote call: {action}")
        try:
            yield
        except openai.APIError as e:
            status_code = getattr(e, "status_code", None)
            logger.error(f"Error {action}: {e.message} (status={status_code})")
            raise RemoteCallError(e.message, status_code) from e

    async def create_assistant(
        self,
        name: str,
        instructions: str,
        model: str | None = None,
    ) -> RemoteObject:
        """Create an assistant with file search and code interpreter tools."""
        _require(name=name, instructions=instructions)
        with self._remote_call("creating assistant"):
            assistant = await self._client.beta.assistants.create(
                name=name,
                instructions=instructions,
                model=model or self._config.model_name,
                tools=ASSISTANT_TOOLS,
            )
        return RemoteObject(id=assistant.id)

    async def create_thread(self) -> RemoteObject:
        """Create an empty conversation thread."""
        with self._remote_call("creating thread"):
            thread = await self._client.beta.threads.create()
        return RemoteObject(id=thread.id)

    async def attach_vector_store_to_thread(
        self, thread_id: str, vector_store_id: str
    ) -> RemoteObject:
        """Make a vector store searchable by runs on the thread."""
        _require(thread_id=thread_id, vector_store_id=vector_store_id)
        with self._remote_call("attaching vector store to thread"):
            thread = await self._client.beta.threads.update(
                thread_id,
                tool_resources={"file_search": {"vector_store_ids": [vector_store_id]}},
            )
        return RemoteObject(id=thread.id)

    async def add_message(
        self,
        thread_id: str,
        content: str,
        role: MessageRole = MessageRole.USER,
    ) -> RemoteObject:
        """Append a message to a thread."""
        _require(thread_id=thread_id, content=content)
        with self._remote_call("adding message to thread"):
            message = await self._client.beta.threads.messages.create(
                thread_id,
                role=MessageRole(role).value,
                content=content,
            )
        return RemoteObject(id=message.id)

    async def run_assistant(
        self,
        thread_id: str,
        assistant_id: str,
        instructions: str | None = None,
    ) -> RunState:
        """Start a run of the assistant against the thread."""
        _require(thread_id=thread_id, assistant_id=assistant_id)
        params: dict[str, Any] = {"assistant_id": assistant_id}
        if instructions:
            params["instructions"] = instructions
        with self._remote_call("running assistant"):
            run = await self._client.beta.threads.runs.create(thread_id, **params)
        return RunState(id=run.id, thread_id=thread_id, status=RunStatus(run.status))

    async def get_run_status(self, thread_id: str, run_id: str) -> RunState:
        """Fetch the current status of a run."""
        _require(thread_id=thread_id, run_id=run_id)
        with self._remote_call("getting run status"):
            run = await self._client.beta.threads.runs.retrieve(run_id, thread_id=thread_id)
        return RunState(id=run.id, thread_id=thread_id, status=RunStatus(run.status))

    async def list_messages(self, thread_id: str) -> list[RemoteMessage]:
        """List thread messages, newest first."""
        _require(thread_id=thread_id)
        with self._remote_call("getting thread messages"):
            page = await self._client.beta.threads.messages.list(thread_id, order="desc")
        return [
            RemoteMessage(
                id=message.id,
                role=MessageRole(message.role),
                content=_message_text(message),
                created_at=datetime.fromtimestamp(message.created_at, tz=UTC),
            )
            for message in page.data
        ]

    async def create_vector_store(self, name: str) -> RemoteObject:
        """Create an empty vector store."""
        _require(name=name)
        with self._remote_call("creating vector store"):
            vector_store = await self._client.vector_stores.create(name=name)
        return RemoteObject(id=vector_store.id)

    async def add_files_to_vector_store(
        self, vector_store_id: str, file_ids: Sequence[str]
    ) -> RemoteObject:
        """Attach already uploaded files to a vector store in one batch."""
        _require(vector_store_id=vector_store_id, file_ids=list(file_ids))
        with self._remote_call("adding files to vector store"):
            batch = await self._client.vector_stores.file_batches.create(
                vector_store_id,
                file_ids=list(file_ids),
            )
        return RemoteObject(id=batch.id)

    async def upload_file(
        self,
        content: bytes,
        filename: str,
        mime_type: str = "application/octet-stream",
        purpose: str = "assistants",
    ) -> RemoteObject:
        """Upload raw file bytes and return the remote file id."""
        _require(filename=filename, purpose=purpose)
        with self._remote_call("uploading file"):
            file = await self._client.files.create(
                file=(filename, content, mime_type),
                purpose=purpose,
            )
        return RemoteObject(id=file.id)

    async def search_vector_store(
        self,
        vector_store_id: str,
        query: str,
        max_results: int = 10,
    ) -> list[SearchHit]:
        """Run a similarity search over a vector store."""
        _require(vector_store_id=vector_store_id, query=query)
        with self._remote_call("searching vector store"):
            page = await self._client.vector_stores.search(
                vector_store_id,
                query=query,
                max_num_results=max_results,
            )
        return [
            SearchHit(
                file_id=result.file_id,
                filename=result.filename,
                score=result.score,
                text="\n".join(part.text for part in result.content if part.type == "text"),
            )
            for result in page.data
        ]

    async def generate_chat_completion(
        self,
        messages: Sequence[dict[str, str]],
        model: str | None = None,
    ) -> dict[str, str]:
        """Generate a plain chat completion without assistants or threads.

        Returns:
            The reply as a ``{"role", "content"}`` dict.
        """
        _require(messages=list(messages))
        with self._remote_call("generating chat completion"):
            completion = await self._client.chat.completions.create(
                model=model or self._config.model_name,
                messages=list(messages),
            )
        reply = completion.choices[0].message
        return {"role": reply.role, "content": reply.content or ""}
