"""Unit tests for the ChatService search and completion helpers."""

import pytest

from src.assistant.errors import NotInitializedError, RemoteCallError
from src.assistant.service import ChatService
from src.models.chat import MessageRole, Notification, NotificationSeverity
from src.models.remote import SearchHit
from tests.conftest import FakeGateway


def collect_notifications(service: ChatService) -> list[Notification]:
    received: list[Notification] = []
    service.notifications.subscribe(received.append)
    return received


class TestSearch:
    """Tests for vector store search."""

    async def test_searches_session_vector_store(
        self, initialized_service: ChatService, gateway: FakeGateway
    ) -> None:
        gateway.search_hits = [SearchHit(file_id="F1", filename="notes.txt", score=0.5)]

        hits = await initialized_service.search("notes", max_results=3)

        assert hits == gateway.search_hits
        assert gateway.args_of("search_vector_store") == ("V1", "notes", 3)

    async def test_uninitialized_search_notifies(
        self, service: ChatService, gateway: FakeGateway
    ) -> None:
        notifications = collect_notifications(service)

        with pytest.raises(NotInitializedError):
            await service.search("notes")

        assert gateway.calls == []
        assert [n.severity for n in notifications] == [NotificationSeverity.ERROR]

    async def test_remote_failure_notifies_once(
        self, initialized_service: ChatService, gateway: FakeGateway
    ) -> None:
        gateway.failures["search_vector_store"] = RemoteCallError("Vector store not found", 404)
        notifications = collect_notifications(initialized_service)

        with pytest.raises(RemoteCallError):
            await initialized_service.search("notes")

        assert len(notifications) == 1
        assert "Vector store not found" in notifications[0].message


class TestComplete:
    """Tests for direct chat completion."""

    async def test_returns_role_and_content(
        self, service: ChatService, gateway: FakeGateway
    ) -> None:
        role, content = await service.complete([(MessageRole.USER, "Hello")])

        assert (role, content) == (MessageRole.ASSISTANT, gateway.reply_text)
        assert gateway.args_of("generate_chat_completion") == (
            [{"role": "user", "content": "Hello"}],
            None,
        )

    async def test_remote_failure_notifies_once(
        self, service: ChatService, gateway: FakeGateway
    ) -> None:
        gateway.failures["generate_chat_completion"] = RemoteCallError("Rate limit exceeded", 429)
        notifications = collect_notifications(service)

        with pytest.raises(RemoteCallError):
            await service.complete([(MessageRole.USER, "Hello")])

        assert len(notifications) == 1
        assert notifications[0].severity == NotificationSeverity.ERROR
        assert "Rate limit exceeded" in notifications[0].message
