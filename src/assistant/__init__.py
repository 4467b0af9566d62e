"""Hosted assistant orchestration.

Drives remote assistant runs and keeps the client-side conversation in step.

Responsibilities:
    - Remote calls for assistants, threads, runs, files and vector stores
    - Polling a run until it completes, fails or times out
    - Sequencing a chat turn and merging the assistant's reply
    - Validating and ingesting files into the session's vector store

Holds no persistent state: the session lives as long as the process.
"""

from src.assistant.config import AssistantConfig, get_assistant_config
from src.assistant.errors import (
    AssistantError,
    NotInitializedError,
    PollError,
    RemoteCallError,
    RunTerminatedError,
    RunTimeoutError,
    SessionBusyError,
    UploadError,
    UploadValidationError,
)
from src.assistant.service import ChatService, get_chat_service

__all__ = [
    "AssistantConfig",
    "AssistantError",
    "ChatService",
    "NotInitializedError",
    "PollError",
    "RemoteCallError",
    "RunTerminatedError",
    "RunTimeoutError",
    "SessionBusyError",
    "UploadError",
    "UploadValidationError",
    "get_assistant_config",
    "get_chat_service",
]
