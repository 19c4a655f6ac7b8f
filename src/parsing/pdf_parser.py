"""PDF parsing module using pypdf.

Recovers the text stream of a PDF and strips the structural artifacts that
leak into it.
"""

import io
import logging
import re

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from src.models.errors import UnreadableDocument

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")
_HEADER_MARKER = re.compile(r"%PDF-\d\.\d")
_STRUCTURAL_KEYWORDS = re.compile(
    r"\b(?:obj|endobj|stream|endstream|xref|trailer|startxref)\b", re.IGNORECASE
)
_NAME_OBJECT = re.compile(r"/\w+", re.ASCII)
_DICTIONARY_BLOCK = re.compile(r"<<.*?>>", re.DOTALL)
_ARRAY_BLOCK = re.compile(r"\[.*?\]", re.DOTALL)
_WHITESPACE_RUN = re.compile(r"\s+")


def clean_pdf_text(text: str) -> str:
    """Strip PDF artifacts from recovered text.

    Args:
        text: Raw text recovered from the PDF.

    Returns:
        Single-spaced, trimmed text free of control characters, header
        markers, structural keywords, name objects, dictionaries and arrays.
    """
    text = _CONTROL_CHARS.sub("", text)
    text = _HEADER_MARKER.sub("", text)
    text = _STRUCTURAL_KEYWORDS.sub("", text)
    text = _NAME_OBJECT.sub("", text)
    text = _DICTIONARY_BLOCK.sub("", text)
    text = _ARRAY_BLOCK.sub("", text)
    # Removing a block can glue fragments like "ob[..]j" back into a keyword
    text = _STRUCTURAL_KEYWORDS.sub("", text)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def read_pdf_text(file_content: bytes) -> str:
    """Recover the raw text stream of every page.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        Page texts joined by newlines, uncleaned.

    Raises:
        UnreadableDocument: If pypdf cannot open the file.
    """
    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = list(reader.pages)
    except PdfReadError as e:
        raise UnreadableDocument(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise UnreadableDocument(f"Failed to read PDF: {e}") from e

    text_parts: list[str] = []
    for i, page in enumerate(pages):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue
        if page_text:
            text_parts.append(page_text)

    return "\n".join(text_parts)
