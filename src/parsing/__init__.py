"""Document text extraction.

Turns uploaded files into plain text that can be merged into a chat turn.

Responsibilities:
    - Size and type validation of uploads
    - PDF text recovery with pypdf and artifact cleanup
    - UTF-8 decoding of plain text, markdown and CSV
    - Length ceiling with an explicit truncation marker
"""

from src.parsing.extractor import ExtractionResult, extract
from src.parsing.pdf_parser import clean_pdf_text, read_pdf_text

__all__ = ["ExtractionResult", "clean_pdf_text", "extract", "read_pdf_text"]
