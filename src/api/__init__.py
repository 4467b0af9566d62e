"""FastAPI endpoints for the Magic Chat service.

The presentation-facing surface over the chat service.

Endpoints:
    - GET /health: Service health status
    - POST /session/initialize: Create assistant, thread and vector store
    - GET /session: Current session identifiers
    - GET /chat/messages: Conversation in display order
    - POST /chat/messages: Run one assistant turn
    - POST /chat/completions: Direct chat completion
    - POST /upload: Ingest a document into the vector store
    - POST /vectorstore/search: Search ingested documents
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
