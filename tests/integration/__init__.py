"""Integration tests for components working together as a system.

Requests go through the real FastAPI app, routers, chat service,
orchestrator and poller. Only the remote gateway is replaced.

Coverage:
    - Session initialization and error mapping
    - Full chat turns, including failed and timed-out runs
    - Upload validation and ingestion
    - Vector store search and direct completions
"""
