"""Pydantic models for conversation state, remote objects and the HTTP API.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - chat: Message and Notification, the client-visible conversation state
    - remote: RunStatus, RunState, RemoteMessage and friends from the gateway
    - schemas: Request/response payloads for the API routers
"""

from src.models.chat import Message, MessageRole, Notification, NotificationSeverity
from src.models.remote import FilePurpose, RemoteMessage, RemoteObject, RunState, RunStatus, SearchHit

__all__ = [
    "FilePurpose",
    "Message",
    "MessageRole",
    "Notification",
    "NotificationSeverity",
    "RemoteMessage",
    "RemoteObject",
    "RunState",
    "RunStatus",
    "SearchHit",
]
