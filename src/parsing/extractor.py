"""Extraction engine: validate an uploaded file and decode it into plain text."""

import logging

from pydantic import BaseModel, Field

from src.models.errors import FileTooLarge, NoExtractableText, UnsupportedType
from src.parsing.pdf_parser import clean_pdf_text, read_pdf_text

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
MAX_TEXT_LENGTH = 15000
TRUNCATION_MARKER = "\n\n[Content truncated]"
PDF_MIME_TYPE = "application/pdf"
ALLOWED_MIME_TYPES = frozenset({PDF_MIME_TYPE, "text/plain", "text/markdown", "text/csv"})
ALLOWED_EXTENSIONS = frozenset({"pdf", "txt", "md", "csv"})


class ExtractionResult(BaseModel):
    """Text extracted from one uploaded file.

    Attributes:
        text: Extracted text, truncated to the length ceiling.
        filename: Original filename.
        length: Number of characters in ``text``.
    """

    text: str
    filename: str
    length: int = Field(ge=0)


def _extension(filename: str) -> str:
    return filename.lower().rsplit(".", 1)[-1]


def _validate(file_content: bytes, filename: str, content_type: str | None) -> None:
    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise FileTooLarge(f"File size ({size_mb:.1f}MB) exceeds the 10MB limit")

    if content_type not in ALLOWED_MIME_TYPES and _extension(filename) not in ALLOWED_EXTENSIONS:
        raise UnsupportedType(f"Unsupported file type: {content_type or filename}")


def _truncate(text: str) -> str:
    if len(text) <= MAX_TEXT_LENGTH:
        return text
    return text[:MAX_TEXT_LENGTH] + TRUNCATION_MARKER


def extract(file_content: bytes, filename: str, content_type: str | None = None) -> ExtractionResult:
    """Extract plain text from an uploaded document.

    Args:
        file_content: Raw bytes of the file.
        filename: Original filename, also used for extension-based typing.
        content_type: MIME type declared by the client, if any.

    Returns:
        ExtractionResult with the cleaned, possibly truncated text.

    Raises:
        FileTooLarge: If the file exceeds 10MB.
        UnsupportedType: If neither MIME type nor extension is supported.
        UnreadableDocument: If a PDF cannot be opened.
        NoExtractableText: If decoding yields no text (e.g. scanned PDF).
    """
    _validate(file_content, filename, content_type)

    if content_type == PDF_MIME_TYPE or _extension(filename) == "pdf":
        text = clean_pdf_text(read_pdf_text(file_content))
    else:
        text = file_content.decode("utf-8", errors="replace").strip()

    if not text:
        logger.warning(f"No extractable text in {filename} (may be scanned/image-based)")
        raise NoExtractableText("Could not extract text. File may be image-based.")

    text = _truncate(text)
    return ExtractionResult(text=text, filename=filename, length=len(text))
