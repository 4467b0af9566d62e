"""Chat endpoints.

A POST to /chat/messages runs a full assistant turn and only returns once
the run has completed, failed or timed out.
"""

import logging

from fastapi import APIRouter

from src.api.deps import ChatServiceDep
from src.api.errors import to_http_exception
from src.assistant.errors import AssistantError
from src.models.chat import Message
from src.models.schemas import (
    ChatRequest,
    ChatResponse,
    CompletionRequest,
    CompletionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/messages", response_model=list[Message])
async def list_messages(service: ChatServiceDep) -> list[Message]:
    """Return the conversation in display order."""
    return service.messages


@router.post("/messages", response_model=ChatResponse)
async def send_message(request: ChatRequest, service: ChatServiceDep) -> ChatResponse:
    """Send a message and wait for the assistant's reply.

    Raises:
        409: Session not initialized, or a previous message is still running.
        502: A remote call failed or the run ended abnormally.
        504: The run did not finish within the polling budget.
    """
    try:
        reply = await service.send_message(request.message, request.instructions)
    except (AssistantError, ValueError) as e:
        logger.warning(f"Chat turn failed: {e}")
        raise to_http_exception(e) from e

    return ChatResponse(reply=reply, messages=service.messages)


@router.post("/completions", response_model=CompletionResponse)
async def create_completion(
    request: CompletionRequest, service: ChatServiceDep
) -> CompletionResponse:
    """Plain chat completion, bypassing the assistant thread."""
    try:
        role, content = await service.complete(
            [(m.role, m.content) for m in request.messages],
            request.model,
        )
    except (AssistantError, ValueError) as e:
        raise to_http_exception(e) from e

    return CompletionResponse(role=role, content=content)
