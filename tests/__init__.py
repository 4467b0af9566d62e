"""Test package for Magic Chat.

Unit tests for isolated logic and integration tests for the HTTP surface.

Structure:
    - unit/: Poller, orchestrator, ingestion, gateway, config and session tests
    - integration/: API tests through the real FastAPI app

The remote assistant service is never called: a scripted FakeGateway
(see conftest.py) stands in for it, and the gateway's own tests mock the SDK.
"""
