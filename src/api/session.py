"""Session initialization endpoints."""

from fastapi import APIRouter

from src.api.deps import ChatServiceDep
from src.api.errors import to_http_exception
from src.assistant.errors import AssistantError
from src.assistant.service import ChatService
from src.models.schemas import SessionInfo

router = APIRouter(prefix="/session", tags=["session"])


def _session_info(service: ChatService) -> SessionInfo:
    session = service.session
    return SessionInfo(
        assistant_id=session.assistant_id,
        thread_id=session.thread_id,
        vector_store_id=session.vector_store_id,
        in_flight=service.in_flight,
    )


@router.post("/initialize", response_model=SessionInfo)
async def initialize_session(service: ChatServiceDep) -> SessionInfo:
    """Create the assistant, thread and vector store.

    Raises:
        409: A message is still being processed.
        502: A remote create call failed.
    """
    try:
        await service.initialize()
    except AssistantError as e:
        raise to_http_exception(e) from e
    return _session_info(service)


@router.get("", response_model=SessionInfo)
async def get_session(service: ChatServiceDep) -> SessionInfo:
    """Return the current session identifiers."""
    return _session_info(service)
