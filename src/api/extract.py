"""Document text extraction endpoint.

Handles file upload, validation and decoding into plain text.
"""

import asyncio
import logging

from fastapi import APIRouter, UploadFile

from src.models.errors import MissingFile, SafeChatError
from src.models.schemas import ErrorResponse, ExtractResponse
from src.parsing.extractor import extract

logger = logging.getLogger(__name__)

router = APIRouter(tags=["extract"])


@router.post(
    "/extract",
    response_model=ExtractResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def extract_file(file: UploadFile | None = None) -> ExtractResponse:
    """Extract plain text from an uploaded document.

    Accepts PDF, plain text, markdown and CSV files up to 10MB.

    Args:
        file: The uploaded file (multipart/form-data field ``file``).

    Returns:
        ExtractResponse with the text, filename and text length.

    Raises:
        400: Missing file, file too large or unsupported type.
        422: No text could be extracted.
        500: Unexpected processing error.
    """
    if file is None:
        raise MissingFile("No file provided")

    filename = file.filename or ""
    content = await file.read()

    try:
        result = await asyncio.to_thread(extract, content, filename, file.content_type)
    except SafeChatError as e:
        logger.warning(f"Extraction rejected for {filename}: {e.message}")
        raise
    except Exception as e:
        logger.exception(f"Extract API error for {filename}")
        raise SafeChatError("Failed to process file") from e

    logger.info(f"Extracted {result.length} chars from {filename}")
    return ExtractResponse(text=result.text, filename=result.filename, length=result.length)
