"""Vector store search endpoint."""

from fastapi import APIRouter

from src.api.deps import ChatServiceDep
from src.api.errors import to_http_exception
from src.assistant.errors import AssistantError
from src.models.schemas import SearchRequest, SearchResponse

router = APIRouter(prefix="/vectorstore", tags=["vectorstore"])


@router.post("/search", response_model=SearchResponse)
async def search_vector_store(request: SearchRequest, service: ChatServiceDep) -> SearchResponse:
    """Similarity search over the files ingested this session."""
    try:
        results = await service.search(request.query, request.max_results)
    except (AssistantError, ValueError) as e:
        raise to_http_exception(e) from e
    return SearchResponse(results=results)
