"""File upload endpoint for vector store ingestion.

Handles file upload, local validation, and vector store attachment. The
optional `purpose` form field selects the Files API purpose (default
`assistants`).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, UploadFile

from src.api.deps import ChatServiceDep
from src.api.errors import to_http_exception
from src.assistant.errors import AssistantError
from src.models.remote import FilePurpose
from src.models.schemas import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: UploadFile,
    service: ChatServiceDep,
    purpose: Annotated[FilePurpose, Form()] = FilePurpose.ASSISTANTS,
) -> UploadResponse:
    """Upload a document and add it to the session's vector store.

    Args:
        file: The uploaded file (multipart/form-data).
        purpose: Files API purpose, "assistants" or "user_data".

    Returns:
        UploadResponse with filename and the conversation entry it produced.

    Raises:
        400: Invalid file (unsupported type, empty, unnamed).
        409: Session not initialized.
        413: File exceeds the size limit.
        422: Missing file or unknown purpose.
        502: Upload or vector store attach failed.
    """
    content = await file.read()

    try:
        message = await service.upload_and_index(
            file.filename, content, file.content_type, purpose
        )
    except AssistantError as e:
        logger.warning(f"Upload failed for {file.filename}: {e}")
        raise to_http_exception(e) from e

    return UploadResponse(filename=file.filename, message=message)
