"""Unit tests for PDF text recovery and cleanup."""

import re

import pytest
import pytest_check as check

from src.models.errors import UnreadableDocument
from src.parsing.pdf_parser import clean_pdf_text, read_pdf_text

KEYWORDS = {"obj", "endobj", "stream", "endstream", "xref", "trailer", "startxref"}
WORD = re.compile(r"\w+")


class TestReadPdfText:
    """Tests for raw text recovery with pypdf."""

    def test_extracts_text(self, sample_pdf_bytes: bytes) -> None:
        """Valid PDF returns its drawn text."""
        check.is_in("Hello PDF World", read_pdf_text(sample_pdf_bytes))

    def test_extracts_every_page(self, multi_page_pdf_bytes: bytes) -> None:
        """Text from all pages is recovered in order."""
        text = read_pdf_text(multi_page_pdf_bytes)

        check.is_in("Page one content", text)
        check.is_in("Page two content", text)
        check.less(text.index("Page one"), text.index("Page two"))

    def test_blank_pdf_returns_empty_text(self, blank_pdf_bytes: bytes) -> None:
        """PDF with an empty page yields no text rather than an error."""
        assert read_pdf_text(blank_pdf_bytes).strip() == ""

    def test_rejects_truncated_pdf(self) -> None:
        """Truncated PDF raises UnreadableDocument."""
        with pytest.raises(UnreadableDocument, match="Corrupt|Failed"):
            read_pdf_text(b"%PDF-1.4\n1 0 obj\n<<")

    def test_rejects_empty_bytes(self) -> None:
        with pytest.raises(UnreadableDocument):
            read_pdf_text(b"")


class TestCleanPdfText:
    """Tests for the artifact cleanup pass."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("%PDF-1.7 Hello", "Hello"),
            ("a\x00b\x08c\x1fd", "abcd"),
            ("keeps\ttabs\nand\rreturns", "keeps tabs and returns"),
            ("1 0 obj Hello endobj", "1 0 Hello"),
            ("OBJ Stream XREF Trailer StartXRef keep", "keep"),
            ("objective streamline xrefs", "objective streamline xrefs"),
            ("/Type /Page Visible", "Visible"),
            ("Preis /Übersicht Wert", "Preis /Übersicht Wert"),
            ("/Font/Übersicht", "/Übersicht"),
            ("<< /Length 44 >> Body", "Body"),
            ("<<\n/Filter\n/FlateDecode\n>>Text", "Text"),
            ("<<a>> keep <<b>>", "keep"),
            ("[1 0 R] Items [\n2\n]", "Items"),
            ("[a] keep [b]", "keep"),
            ("a   b\n\n\tc", "a b c"),
            ("   padded   ", "padded"),
        ],
    )
    def test_cleanup(self, raw: str, expected: str) -> None:
        assert clean_pdf_text(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "stream endstream xref trailer startxref obj endobj",
            "ob[x]j visible",
            "end<<a>>obj visible",
            "st[1]ream and x<<k>>ref",
            "obj.obj,obj;(obj)",
            "%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\nxref\ntrailer\nstartxref",
            "ENDSTREAM\x00stream\x01OBJ",
        ],
    )
    def test_never_leaves_structural_keywords(self, raw: str) -> None:
        """No structural keyword survives as a standalone token."""
        words = {w.lower() for w in WORD.findall(clean_pdf_text(raw))}

        assert not words & KEYWORDS

    def test_pdf_with_keywords_in_content(self, make_pdf) -> None:
        """Keywords drawn into a real PDF are stripped after recovery."""
        pdf = make_pdf(["Quarterly obj report stream [draft] summary"])

        text = clean_pdf_text(read_pdf_text(pdf))

        check.is_in("Quarterly", text)
        check.is_in("summary", text)
        check.is_not_in("draft", text)
        check.equal({w.lower() for w in WORD.findall(text)} & KEYWORDS, set())
