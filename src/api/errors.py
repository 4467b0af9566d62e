"""Mapping from orchestration errors to HTTP responses."""

import logging

from fastapi import HTTPException, status

from src.assistant.errors import (
    AssistantError,
    NotInitializedError,
    PollError,
    RemoteCallError,
    RunTerminatedError,
    RunTimeoutError,
    SessionBusyError,
    UploadError,
    UploadValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(error: Exception) -> HTTPException:
    """Convert an orchestration error into an HTTPException.

    Args:
        error: The error raised by the chat service.

    Returns:
        HTTPException with a status code matching the failure.
    """
    if isinstance(error, (NotInitializedError, SessionBusyError)):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(error, UploadValidationError):
        status_code = (
            status.HTTP_413_CONTENT_TOO_LARGE if error.too_large else status.HTTP_400_BAD_REQUEST
        )
    elif isinstance(error, RunTimeoutError):
        status_code = status.HTTP_504_GATEWAY_TIMEOUT
    elif isinstance(error, (RunTerminatedError, PollError, UploadError, RemoteCallError)):
        status_code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(error, ValueError):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code >= 500 and not isinstance(error, AssistantError):
        logger.error(f"Unexpected error: {error}")

    return HTTPException(status_code=status_code, detail=str(error))
