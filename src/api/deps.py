"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends

from src.assistant.service import ChatService, get_chat_service

ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
