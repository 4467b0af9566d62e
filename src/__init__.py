"""Magic Chat - chat front-end for a hosted AI assistant.

Combines FastAPI for HTTP, the OpenAI SDK for assistant runs and vector
stores, and Pydantic for data validation.

Components:
    - api: HTTP endpoints for session, chat, upload and search
    - assistant: Gateway, run polling, turn orchestration and ingestion
    - models: Conversation, remote and request/response schemas
"""

__version__ = "0.1.0"
