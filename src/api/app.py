"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.chat import router as chat_router
from src.api.session import router as session_router
from src.api.upload import router as upload_router
from src.api.vectorstore import router as vectorstore_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    The assistant session is not created here; clients call
    POST /session/initialize once the UI is ready.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Magic Chat API...")
    yield
    # Shutdown
    logger.info("Shutting down Magic Chat API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Magic Chat API",
        description=(
            "Chat front-end for a hosted AI assistant. Relays messages to an "
            "assistant thread, waits for each run to finish, and ingests uploaded "
            "documents into a vector store for file search."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(session_router)
    application.include_router(chat_router)
    application.include_router(upload_router)
    application.include_router(vectorstore_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "magic-chat"}

    return application


app = create_app()
