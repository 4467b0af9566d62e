"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - config: AssistantConfig with a dummy key and no polling delay
    - gateway: Scripted FakeGateway that records every call
    - service: ChatService wired to the fake gateway
    - async_client: HTTPX client for API testing, bound to the service

The fake stands in for the remote service only; everything above the
gateway is the real code.
"""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import app
from src.assistant.config import AssistantConfig
from src.assistant.service import ChatService, get_chat_service
from src.models.chat import MessageRole
from src.models.remote import RemoteMessage, RemoteObject, RunState, RunStatus, SearchHit

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class FakeGateway:
    """In-memory stand-in for AssistantGateway.

    Attributes:
        calls: (method name, args) for every call, in order.
        statuses: Run statuses returned by successive get_run_status calls.
            The last one repeats once the list is used up.
        thread_messages: Fixed list_messages result. When None, a fresh
            assistant reply stamped with the shared clock is returned.
        failures: Method name -> exception raised when that method is called.
        on_run_status: Optional hook run on every status check.
    """

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.statuses: list[RunStatus] = [RunStatus.COMPLETED]
        self.thread_messages: list[RemoteMessage] | None = None
        self.reply_text = "Hi! How can I help?"
        self.failures: dict[str, Exception] = {}
        self.on_run_status: Callable[[], None] | None = None
        self.search_hits: list[SearchHit] = []
        self._status_checks = 0
        self._replies = 0

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def args_of(self, name: str) -> tuple[Any, ...]:
        return next(args for call, args in self.calls if call == name)

    async def create_assistant(
        self, name: str, instructions: str, model: str | None = None
    ) -> RemoteObject:
        self._record("create_assistant", name, instructions, model)
        return RemoteObject(id="A1")

    async def create_thread(self) -> RemoteObject:
        self._record("create_thread")
        return RemoteObject(id="T1")

    async def attach_vector_store_to_thread(
        self, thread_id: str, vector_store_id: str
    ) -> RemoteObject:
        self._record("attach_vector_store_to_thread", thread_id, vector_store_id)
        return RemoteObject(id=thread_id)

    async def create_vector_store(self, name: str) -> RemoteObject:
        self._record("create_vector_store", name)
        return RemoteObject(id="V1")

    async def add_message(
        self, thread_id: str, content: str, role: MessageRole = MessageRole.USER
    ) -> RemoteObject:
        self._record("add_message", thread_id, content, role)
        return RemoteObject(id="msg_user")

    async def run_assistant(
        self, thread_id: str, assistant_id: str, instructions: str | None = None
    ) -> RunState:
        self._record("run_assistant", thread_id, assistant_id, instructions)
        return RunState(id="R1", thread_id=thread_id, status=RunStatus.QUEUED)

    async def get_run_status(self, thread_id: str, run_id: str) -> RunState:
        self._record("get_run_status", thread_id, run_id)
        if self.on_run_status is not None:
            self.on_run_status()
        index = min(self._status_checks, len(self.statuses) - 1)
        self._status_checks += 1
        return RunState(id=run_id, thread_id=thread_id, status=self.statuses[index])

    async def list_messages(self, thread_id: str) -> list[RemoteMessage]:
        self._record("list_messages", thread_id)
        if self.thread_messages is not None:
            return list(self.thread_messages)
        self._replies += 1
        now = self.clock()
        return [
            RemoteMessage(
                id=f"msg_reply_{self._replies}",
                role=MessageRole.ASSISTANT,
                content=self.reply_text,
                created_at=now,
            ),
            RemoteMessage(
                id="msg_user",
                role=MessageRole.USER,
                content="Hello",
                created_at=now - timedelta(seconds=1),
            ),
        ]

    async def upload_file(
        self,
        content: bytes,
        filename: str,
        mime_type: str = "application/octet-stream",
        purpose: str = "assistants",
    ) -> RemoteObject:
        self._record("upload_file", content, filename, mime_type, purpose)
        return RemoteObject(id="F1")

    async def add_files_to_vector_store(
        self, vector_store_id: str, file_ids: list[str]
    ) -> RemoteObject:
        self._record("add_files_to_vector_store", vector_store_id, list(file_ids))
        return RemoteObject(id="batch_1")

    async def search_vector_store(
        self, vector_store_id: str, query: str, max_results: int = 10
    ) -> list[SearchHit]:
        self._record("search_vector_store", vector_store_id, query, max_results)
        return list(self.search_hits)

    async def generate_chat_completion(
        self, messages: list[dict[str, str]], model: str | None = None
    ) -> dict[str, str]:
        self._record("generate_chat_completion", messages, model)
        return {"role": "assistant", "content": self.reply_text}


@pytest.fixture
def config() -> AssistantConfig:
    """Configuration with a dummy API key and no delay between polls."""
    return AssistantConfig(api_key="sk-test-key", poll_interval_seconds=0.0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def gateway(clock: FakeClock) -> FakeGateway:
    return FakeGateway(clock)


@pytest.fixture
def service(config: AssistantConfig, gateway: FakeGateway, clock: FakeClock) -> ChatService:
    """ChatService backed by the fake gateway, sharing its clock."""
    return ChatService(config=config, gateway=gateway, clock=clock)


@pytest.fixture
def initialized_service(service: ChatService) -> ChatService:
    """Service with session ids set directly (no welcome message)."""
    service.session.assistant_id = "A1"
    service.session.thread_id = "T1"
    service.session.vector_store_id = "V1"
    return service


@pytest.fixture
async def async_client(service: ChatService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient whose requests hit the fake-backed service.
    """
    app.dependency_overrides[get_chat_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
