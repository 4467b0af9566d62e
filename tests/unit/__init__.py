"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - assistant/poller: Run status state machine and attempt budget
    - assistant/orchestrator: Turn sequencing and reply matching
    - assistant/ingestion: File validation and vector store attachment
    - assistant/gateway: SDK parameter shaping and error pass-through
    - assistant/config, session: Validation, ordering and notifications

Uses a fake gateway or mocked SDK client for the remote service.
"""
