"""Unit tests for ChatSession and NotificationBus."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from src.assistant.errors import NotInitializedError
from src.assistant.notifications import NotificationBus
from src.assistant.session import ChatSession
from src.models.chat import Message, MessageRole, Notification, NotificationSeverity

T0 = datetime(2025, 1, 1, tzinfo=UTC)


def message(id: str, seconds: int) -> Message:
    return Message(
        id=id,
        role=MessageRole.ASSISTANT,
        content=id,
        created_at=T0 + timedelta(seconds=seconds),
    )


class TestChatSession:
    """Tests for identifier preconditions and message ordering."""

    def test_require_names_missing_identifiers(self) -> None:
        session = ChatSession(assistant_id="A1")

        with pytest.raises(NotInitializedError) as exc_info:
            session.require("assistant_id", "thread_id", "vector_store_id")

        assert exc_info.value.missing == ("thread_id", "vector_store_id")
        assert "thread_id" in str(exc_info.value)

    def test_require_passes_when_set(self) -> None:
        session = ChatSession(assistant_id="A1", thread_id="T1", vector_store_id="V1")

        session.require("assistant_id", "thread_id", "vector_store_id")
        assert session.is_initialized

    def test_messages_keep_time_order(self) -> None:
        session = ChatSession()
        session.append(message("b", 2))
        session.append(message("a", 1))
        session.append(message("c", 3))

        assert [m.id for m in session.messages] == ["a", "b", "c"]

    def test_ties_keep_insertion_order(self) -> None:
        session = ChatSession()
        session.append(message("first", 1))
        session.append(message("second", 1))
        session.append(message("third", 1))

        assert [m.id for m in session.messages] == ["first", "second", "third"]

    def test_messages_returns_a_copy(self) -> None:
        session = ChatSession()
        session.append(message("a", 1))

        session.messages.clear()

        assert len(session.messages) == 1

    def test_reset_clears_everything(self) -> None:
        session = ChatSession(assistant_id="A1", thread_id="T1", vector_store_id="V1")
        session.append(message("a", 1))

        session.reset()

        assert session.assistant_id is None
        assert session.messages == []
        assert not session.is_initialized

    def test_messages_are_immutable(self) -> None:
        msg = message("a", 1)

        with pytest.raises(ValidationError):
            msg.content = "changed"


class TestNotificationBus:
    """Tests for fire-and-forget delivery."""

    def test_delivers_to_subscribers(self) -> None:
        bus = NotificationBus()
        received: list[Notification] = []
        bus.subscribe(received.append)

        bus.error("Something broke")
        bus.success("Done")

        assert [(n.message, n.severity) for n in received] == [
            ("Something broke", NotificationSeverity.ERROR),
            ("Done", NotificationSeverity.SUCCESS),
        ]

    def test_unsubscribe_stops_delivery(self) -> None:
        bus = NotificationBus()
        received: list[Notification] = []
        unsubscribe = bus.subscribe(received.append)

        unsubscribe()
        bus.info("ignored")

        assert received == []

    def test_failing_subscriber_does_not_block_others(self) -> None:
        bus = NotificationBus()
        received: list[Notification] = []

        def broken(_: Notification) -> None:
            raise RuntimeError("subscriber bug")

        bus.subscribe(broken)
        bus.subscribe(received.append)

        bus.info("hello")

        assert len(received) == 1

    def test_without_subscribers_nothing_is_kept(self) -> None:
        bus = NotificationBus()

        notification = bus.info("hello")

        assert notification.severity == NotificationSeverity.INFO
